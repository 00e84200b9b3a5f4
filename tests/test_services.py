import json
import pathlib

import pytest
import requests

from domain.vehicle import CompatibilityRecord
from services import cache as cache_mod
from services import http as http_mod
from services.cache import DiskCache
from services.catalog import HostedCatalog, load_catalog, product_from_row
from services.http import Http, ProviderError
from services.settings import Settings

SAMPLE = pathlib.Path(__file__).resolve().parents[1] / "data" / "sample_catalog.json"


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload) if not isinstance(payload, str) else payload

    def json(self):
        if isinstance(self._payload, str):
            raise ValueError("not json")
        return self._payload


def _hosted_settings(tmp_path):
    return Settings(
        supabase_url="https://demo.supabase.co/",
        supabase_key="anon-key",
        cache_dir=str(tmp_path / "cache"),
    )


# ---------------- local catalog ----------------
def test_load_sample_catalog():
    products = load_catalog(str(SAMPLE))
    assert [p.id for p in products] == [1, 2, 3, 4, 5]
    first = products[0]
    assert first.price == 89.99
    assert first.vehicle_compatibility[0] == CompatibilityRecord("2017", "toyota", "corolla", "specific")
    assert products[1].vehicle_compatibility[0] == CompatibilityRecord(None, "toyota", None, "make")


def test_load_catalog_from_env(monkeypatch):
    monkeypatch.setenv("PARTMATCH_CATALOG", str(SAMPLE))
    assert len(load_catalog()) == 5


def test_load_catalog_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "nope.json"))


def test_load_catalog_wrapped_and_bad_shape(tmp_path):
    good = tmp_path / "wrapped.json"
    good.write_text(json.dumps({"products": [{"id": "a", "name": "Honda Civic Air Filter"}]}), encoding="utf-8")
    products = load_catalog(str(good))
    assert products[0].vehicle_compatibility == (CompatibilityRecord(None, "honda", "civic", "model"),)

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"items": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(bad))


# ---------------- row mapping ----------------
def test_product_from_db_row():
    row = {
        "id": 42,
        "name": "Brake Rotor",
        "description": "Front rotor",
        "sku": "BR-1",
        "part_number": "PN-1",
        "price": "59.90",
        "discount_price": 49.5,
        "stock_quantity": "7",
        "compatibility": {"year": 2019, "make": "honda", "model": "accord", "matchType": "specific"},
    }
    p = product_from_row(row)
    assert p.price == 49.5
    assert p.stock_quantity == 7
    assert (p.sku, p.part_number) == ("BR-1", "PN-1")
    assert p.vehicle_compatibility == (CompatibilityRecord("2019", "honda", "accord", "specific"),)


def test_product_from_row_infers_missing_compatibility():
    p = product_from_row({"id": 1, "name": "Toyota Camry wiper 2016", "price": 9})
    assert p.price == 9.0
    assert p.vehicle_compatibility == (CompatibilityRecord("2016", "toyota", "camry", "specific"),)

    p = product_from_row({"id": 1, "name": "Toyota Camry wiper 2016", "compatibility": None})
    assert p.vehicle_compatibility == (CompatibilityRecord("2016", "toyota", "camry", "specific"),)


def test_product_from_row_keeps_explicit_empty_compatibility():
    p = product_from_row({"id": 1, "name": "Toyota Camry wiper 2016", "compatibility": []})
    assert p.vehicle_compatibility == ()

    p = product_from_row({"id": 1, "name": "Toyota Camry wiper 2016", "compatibility": ["x", 3]})
    assert p.vehicle_compatibility == ()


def test_product_from_row_tolerates_missing_fields():
    p = product_from_row({"id": None, "price": "n/a", "vehicleCompatibility": [{"make": "ford"}]})
    assert p.name == "" and p.price is None
    assert p.vehicle_compatibility == (CompatibilityRecord(None, "ford", None, None),)


# ---------------- hosted catalog ----------------
def test_hosted_catalog_requires_credentials(tmp_path):
    with pytest.raises(ProviderError):
        HostedCatalog(Settings(cache_dir=str(tmp_path)))


@pytest.mark.timeout(5)
def test_hosted_catalog_fetch_and_cache(monkeypatch, tmp_path):
    calls = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append((url, params, headers))
        return _FakeResponse([
            {"id": 7, "name": "Ford F-150 Oil Filter 2019", "price": 12.0, "compatibility": None},
            "garbage",
        ])

    monkeypatch.setattr(http_mod.requests, "get", fake_get)
    hc = HostedCatalog(_hosted_settings(tmp_path))

    products = hc.fetch_products()
    assert [p.id for p in products] == [7]
    assert products[0].vehicle_compatibility == (CompatibilityRecord("2019", "ford", "f-150", "specific"),)

    url, params, headers = calls[0]
    assert url == "https://demo.supabase.co/rest/v1/products"
    assert params["status"] == "eq.approved" and params["is_active"] == "eq.true"
    assert headers["apikey"] == "anon-key"
    assert headers["Authorization"] == "Bearer anon-key"

    hc.fetch_products()
    assert len(calls) == 1


@pytest.mark.timeout(5)
def test_hosted_catalog_rejects_non_list(monkeypatch, tmp_path):
    monkeypatch.setattr(http_mod.requests, "get", lambda *a, **k: _FakeResponse({"message": "oops"}))
    with pytest.raises(ProviderError):
        HostedCatalog(_hosted_settings(tmp_path)).fetch_products()


# ---------------- http ----------------
@pytest.mark.timeout(5)
def test_http_retries_then_raises(monkeypatch):
    attempts = []

    def fake_get(url, **kwargs):
        attempts.append(url)
        return _FakeResponse({"error": "down"}, status_code=503)

    monkeypatch.setattr(http_mod.requests, "get", fake_get)
    monkeypatch.setattr(http_mod.time, "sleep", lambda s: None)

    with pytest.raises(ProviderError):
        Http(max_retries=3).get_json("https://example.test/x")
    assert len(attempts) == 3


@pytest.mark.timeout(5)
def test_http_recovers_after_transport_error(monkeypatch):
    responses = iter([requests.ConnectionError("reset"), _FakeResponse([1, 2])])

    def fake_get(url, **kwargs):
        r = next(responses)
        if isinstance(r, Exception):
            raise r
        return r

    monkeypatch.setattr(http_mod.requests, "get", fake_get)
    monkeypatch.setattr(http_mod.time, "sleep", lambda s: None)
    assert Http().get_json("https://example.test/x") == [1, 2]


@pytest.mark.timeout(5)
def test_http_invalid_json(monkeypatch):
    monkeypatch.setattr(http_mod.requests, "get", lambda *a, **k: _FakeResponse("<html>"))
    monkeypatch.setattr(http_mod.time, "sleep", lambda s: None)
    with pytest.raises(ProviderError):
        Http(max_retries=2).get_json("https://example.test/x")


# ---------------- cache ----------------
def test_disk_cache_roundtrip_and_expiry(monkeypatch, tmp_path):
    c = DiskCache(dir=str(tmp_path), ttl_minutes=5)
    c.set("k", [{"id": 1}])
    assert c.get("k") == [{"id": 1}]
    assert c.get("other") is None

    now = cache_mod.time.time()
    monkeypatch.setattr(cache_mod.time, "time", lambda: now + 6 * 60)
    assert c.get("k") is None


def test_disk_cache_corrupt_entry_is_miss(tmp_path):
    c = DiskCache(dir=str(tmp_path))
    c.set("k", 1)
    pathlib.Path(c._path("k")).write_text("{not json", encoding="utf-8")
    assert c.get("k") is None


def test_disk_cache_disabled(tmp_path):
    c = DiskCache(dir=str(tmp_path), enabled=False)
    c.set("k", 1)
    assert c.get("k") is None
    assert not any(tmp_path.iterdir())


# ---------------- settings ----------------
def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PARTMATCH_SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("PARTMATCH_SUPABASE_KEY", "k")
    monkeypatch.setenv("PARTMATCH_CACHE_TTL_MINUTES", "15")
    monkeypatch.setenv("PARTMATCH_LOG_LEVEL", "debug")
    monkeypatch.delenv("PARTMATCH_CATALOG", raising=False)

    s = Settings.from_env(dotenv=False)
    assert s.has_hosted_catalog
    assert s.cache_ttl_minutes == 15
    assert s.log_level == "DEBUG"
    assert s.catalog_path == "data/sample_catalog.json"
    assert s.products_table == "products"


def test_settings_bad_int(monkeypatch):
    monkeypatch.setenv("PARTMATCH_CACHE_TTL_MINUTES", "soon")
    with pytest.raises(ValueError):
        Settings.from_env(dotenv=False)


def _read_only_makedirs(*args, **kwargs):
    raise PermissionError("read-only file system")


def test_disk_cache_unwritable_dir_is_miss(monkeypatch, tmp_path):
    monkeypatch.setattr(cache_mod.os, "makedirs", _read_only_makedirs)
    c = DiskCache(dir=str(tmp_path / "ro"))
    c.set("k", [1])
    assert c.get("k") is None


@pytest.mark.timeout(5)
def test_hosted_catalog_works_without_cache_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(cache_mod.os, "makedirs", _read_only_makedirs)
    monkeypatch.setattr(
        http_mod.requests, "get", lambda *a, **k: _FakeResponse([{"id": 1, "name": "Honda Civic Air Filter"}])
    )
    products = HostedCatalog(_hosted_settings(tmp_path)).fetch_products()
    assert [p.id for p in products] == [1]
