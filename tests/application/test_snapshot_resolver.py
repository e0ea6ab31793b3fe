from florist_orders.application.snapshot import SnapshotResolver


async def test_resolves_name_and_price_from_catalog(catalog):
    snapshot = await SnapshotResolver(catalog).resolve("b-lily", "fallback", 1)
    assert snapshot.name == "White Lily"
    assert snapshot.price == 75000


async def test_unknown_product_uses_fallback_verbatim(catalog):
    snapshot = await SnapshotResolver(catalog).resolve("b-deleted", "Old Tulips", 42000)
    assert snapshot.name == "Old Tulips"
    assert snapshot.price == 42000


async def test_negative_fallback_price_floored_at_zero(catalog):
    snapshot = await SnapshotResolver(catalog).resolve("b-deleted", "Old Tulips", -10)
    assert snapshot.price == 0


async def test_catalog_failure_is_absorbed(catalog):
    catalog.unavailable = True
    snapshot = await SnapshotResolver(catalog).resolve("b-rose", "Rose (from UI)", "45000")
    assert snapshot.name == "Rose (from UI)"
    assert snapshot.price == 45000


async def test_empty_product_id_skips_lookup(catalog):
    snapshot = await SnapshotResolver(catalog).resolve("", "Manual", 10)
    assert snapshot.name == "Manual"
    assert catalog.calls == []
