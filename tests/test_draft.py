import asyncio
import json

import pytest

from app.draft import DraftController, parse_decimal, parse_integer
from app.models import ProductDraft
from app.service import CollectionSynchronizer


@pytest.mark.parametrize("raw, expected", [
    ("10", 10.0),
    ("9.99", 9.99),
    (" 12.5kg", 12.5),
    (".5", 0.5),
    ("-3", -3.0),
    ("1e2", 100.0),
    ("", None),
    ("abc", None),
    ("1e999", None),
    ("\u0663", None),
])
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    ("3.9", 3),
    ("42 units", 42),
    ("", None),
    ("x7", None),
    ("\u0663\u0664", None),
])
def test_parse_integer(raw, expected):
    assert parse_integer(raw) == expected


def test_update_field_is_partial():
    drafts = DraftController(synchronizer=None)
    drafts.update_field("name", "Bolt")
    drafts.update_field("price", "0.25")
    assert drafts.draft == ProductDraft(name="Bolt", price="0.25")


def test_update_unknown_field():
    drafts = DraftController(synchronizer=None)
    with pytest.raises(ValueError):
        drafts.update_field("sku", "B-1")


def test_cancel_resets_draft():
    drafts = DraftController(synchronizer=None)
    assert drafts.toggle() is True
    drafts.update_field("name", "Bolt")
    assert drafts.toggle() is False
    assert drafts.draft == ProductDraft()


def test_payload_copies_text_and_parses_numbers():
    drafts = DraftController(synchronizer=None)
    drafts.draft = ProductDraft(name=" Bolt ", description="Steel", price="0.25", quantity="100")
    payload = drafts.to_payload()
    assert payload.name == " Bolt "
    assert payload.description == "Steel"
    assert payload.price == 0.25
    assert payload.quantity == 100


def fill(drafts):
    drafts.toggle()
    for field, value in (("name", "Bolt"), ("price", "0.25"), ("quantity", "100")):
        drafts.update_field(field, value)


def test_successful_submit_closes_form(inventory, make_client):
    client = make_client()

    async def scenario():
        async with client:
            synchronizer = CollectionSynchronizer(client)
            await synchronizer.initial_load()
            drafts = DraftController(synchronizer)
            fill(drafts)
            assert await drafts.submit() is True
            return synchronizer, drafts

    synchronizer, drafts = asyncio.run(scenario())
    assert drafts.visible is False
    assert drafts.draft == ProductDraft()
    assert [p.name for p in synchronizer.products] == ["Widget", "Gadget", "Bolt"]


def test_failed_submit_keeps_form_and_values(inventory, make_client):
    inventory.failing.add(("POST", "products"))
    client = make_client()

    async def scenario():
        async with client:
            synchronizer = CollectionSynchronizer(client)
            await synchronizer.initial_load()
            before = list(synchronizer.products)
            drafts = DraftController(synchronizer)
            fill(drafts)
            assert await drafts.submit() is False
            return synchronizer, drafts, before

    synchronizer, drafts, before = asyncio.run(scenario())
    assert drafts.visible is True
    assert drafts.draft == ProductDraft(name="Bolt", price="0.25", quantity="100")
    assert synchronizer.products == before
    assert synchronizer.state.error == "Failed to create product"


def test_non_numeric_entry_is_forwarded(inventory, make_client):
    inventory.failing.add(("POST", "products"))
    client = make_client()

    async def scenario():
        async with client:
            drafts = DraftController(CollectionSynchronizer(client))
            drafts.toggle()
            drafts.update_field("name", "Bolt")
            drafts.update_field("price", "cheap")
            drafts.update_field("quantity", "lots")
            await drafts.submit()

    asyncio.run(scenario())
    body = json.loads(inventory.requests[-1].content)
    assert body == {"name": "Bolt", "description": "", "price": None, "quantity": None}
