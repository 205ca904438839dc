"""Shared record factories for catalog tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from catalog.records import (
    GuitarRecord,
    ImageRecord,
    ManufacturerRecord,
    ModelRecord,
    ProductLineRecord,
)


@pytest.fixture
def gibson() -> ManufacturerRecord:
    return ManufacturerRecord(
        id='mfr-gibson',
        name='Gibson Guitar Corporation',
        display_name='Gibson',
        status='active',
        country='USA',
        founded_year=1902,
        counts={'models': 1204, 'product_lines': 12},
    )


@pytest.fixture
def fender() -> ManufacturerRecord:
    return ManufacturerRecord(
        id='mfr-fender',
        name='Fender',
        status='active',
        country='USA',
        founded_year=1946,
        counts={'models': 3, 'product_lines': 2},
    )


@pytest.fixture
def les_paul(gibson) -> ModelRecord:
    return ModelRecord(
        id='model-lp59',
        name='Les Paul Standard',
        year=1959,
        manufacturer=gibson,
        product_line_name='Les Paul',
        production_type='limited',
        msrp_original=Decimal('247.50'),
        currency='USD',
        counts={'individual_guitars': 2},
    )


@pytest.fixture
def make_guitar():
    def _make(id='g-1', **fields) -> GuitarRecord:
        return GuitarRecord(id=id, **fields)
    return _make


@pytest.fixture
def make_model():
    def _make(id='m-1', name='Model', year=1960, **fields) -> ModelRecord:
        return ModelRecord(id=id, name=name, year=year, **fields)
    return _make


@pytest.fixture
def make_image():
    def _make(entity_id='g-1', image_type='gallery', original_url='https://img.example/o.jpg',
              **fields) -> ImageRecord:
        return ImageRecord(entity_id=entity_id, image_type=image_type,
                           original_url=original_url, **fields)
    return _make


class FakeQueries:
    """In-memory stand-in for CatalogQueries."""

    def __init__(self, guitars=None, models=None, manufacturers=None, product_lines=None):
        self.guitars = list(guitars or [])
        self.models = list(models or [])
        self.manufacturers = list(manufacturers or [])
        self.product_lines = list(product_lines or [])
        self.calls = []

    def fetch_guitars(self):
        self.calls.append('guitars')
        return list(self.guitars)

    def fetch_models(self):
        self.calls.append('models')
        return list(self.models)

    def fetch_manufacturers(self):
        self.calls.append('manufacturers')
        return list(self.manufacturers)

    def fetch_product_lines(self):
        self.calls.append('product_lines')
        return list(self.product_lines)

    def _find(self, kind, records, entity_id):
        self.calls.append(f"{kind}:{entity_id}")
        return next((record for record in records if record.id == entity_id), None)

    def fetch_guitar(self, guitar_id):
        return self._find('guitar', self.guitars, guitar_id)

    def fetch_model(self, model_id):
        return self._find('model', self.models, model_id)

    def fetch_manufacturer(self, manufacturer_id):
        return self._find('manufacturer', self.manufacturers, manufacturer_id)

    def fetch_product_line(self, product_line_id):
        return self._find('product_line', self.product_lines, product_line_id)


@pytest.fixture
def catalog_queries(les_paul, gibson, fender, make_model):
    """A small catalog with linked and unlinked guitars."""
    stratocaster = make_model(id='model-strat54', name='Stratocaster', year=1954,
                              manufacturer=fender, product_line_name=None,
                              production_type='mass')
    prototype = make_model(id='model-proto', name='Prototype X', year=1962,
                           manufacturer=None, production_type='prototype')
    guitars = [
        GuitarRecord(id='g-burst', serial_number='9-0824', significance_level='historic',
                     condition_rating='excellent', current_estimated_value=Decimal('2000000'),
                     linked_model=les_paul),
        GuitarRecord(id='g-blackie', nickname='Blackie', significance_level='legendary',
                     current_estimated_value=Decimal('959500'),
                     manufacturer_name_fallback='Fender', model_name_fallback='Stratocaster (partscaster)',
                     year_estimate='circa 1956-1957'),
        GuitarRecord(id='g-strat', serial_number='0100', significance_level='notable',
                     condition_rating='very_good', linked_model=stratocaster),
    ]
    product_lines = [
        ProductLineRecord(id='pl-lp', name='Les Paul', manufacturer=gibson, introduced_year=1952,
                          updated_at=datetime(2024, 3, 1), counts={'models': 40}),
        ProductLineRecord(id='pl-flying-v', name='Flying V', manufacturer=gibson,
                          introduced_year=1958, discontinued_year=1959, counts={'models': 2}),
    ]
    return FakeQueries(
        guitars=guitars,
        models=[les_paul, stratocaster, prototype],
        manufacturers=[gibson, fender],
        product_lines=product_lines,
    )
