import asyncio
import hashlib
import time
import unittest
from unittest.mock import AsyncMock

import httpx
from pydantic import ValidationError

from debridhub.config import Settings
from debridhub.models import DebridProvider
from debridhub.services.downloaders import (
    AllDebridService,
    CacheAggregator,
    ProviderRegistry,
    RealDebridService,
    TorboxService,
    cached_providers,
    check_all_caches,
    create_debrid_services,
)


HASHES = [hashlib.sha1(name.encode()).hexdigest() for name in ("alpha", "beta", "gamma")]


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def realdebrid_handler(request):
    return httpx.Response(200, json={HASHES[0]: {"rd": [{"1": {"filename": "a.mkv"}}]}})


def torbox_handler(request):
    return httpx.Response(200, json={"success": True, "data": {HASHES[1]: {"files": []}}})


def alldebrid_handler(request):
    return httpx.Response(200, json={"status": "success", "data": {"magnets": [
        {"instant": False}, {"instant": False}, {"instant": True},
    ]}})


def build_registry():
    return ProviderRegistry({
        DebridProvider.REAL_DEBRID: RealDebridService("rd-token-123", client=mock_client(realdebrid_handler)),
        DebridProvider.TORBOX: TorboxService("torbox-key-123", client=mock_client(torbox_handler)),
        DebridProvider.ALLDEBRID: AllDebridService("alldebrid-key", client=mock_client(alldebrid_handler)),
    })


class TestCacheAggregator(unittest.IsolatedAsyncioTestCase):
    async def test_collects_every_provider(self):
        registry = build_registry()
        results = await CacheAggregator(registry).check_cache_all(HASHES)

        self.assertEqual(set(results), {"realdebrid", "torbox", "alldebrid"})
        for provider_results in results.values():
            self.assertEqual(set(provider_results), set(HASHES))

        self.assertEqual(cached_providers(results, HASHES[0]), ["realdebrid"])
        self.assertEqual(cached_providers(results, HASHES[1]), ["torbox"])
        self.assertEqual(cached_providers(results, HASHES[2].upper()), ["alldebrid"])

    async def test_one_provider_raising_does_not_affect_others(self):
        registry = build_registry()
        registry.get(DebridProvider.REAL_DEBRID).check_cache = AsyncMock(side_effect=RuntimeError("boom"))

        results = await CacheAggregator(registry).check_cache_all(HASHES)

        self.assertEqual(results["realdebrid"], {})
        self.assertTrue(results["torbox"][HASHES[1]].cached)
        self.assertFalse(results["torbox"][HASHES[0]].cached)
        self.assertTrue(results["alldebrid"][HASHES[2]].cached)
        self.assertEqual(len(results["alldebrid"]), 3)

    async def test_providers_run_concurrently_and_timeouts_stay_isolated(self):
        async def slow_torbox(request):
            await asyncio.sleep(0.4)
            return torbox_handler(request)

        async def slow_alldebrid(request):
            await asyncio.sleep(0.4)
            return alldebrid_handler(request)

        def timing_out(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        registry = ProviderRegistry({
            DebridProvider.REAL_DEBRID: RealDebridService("rd-token-123", client=mock_client(timing_out)),
            DebridProvider.TORBOX: TorboxService("torbox-key-123", client=mock_client(slow_torbox)),
            DebridProvider.ALLDEBRID: AllDebridService("alldebrid-key", client=mock_client(slow_alldebrid)),
        })

        started = time.monotonic()
        results = await CacheAggregator(registry).check_cache_all(HASHES)
        elapsed = time.monotonic() - started

        # Two 0.4s providers finish together, not one after the other
        self.assertLess(elapsed, 0.7)
        self.assertEqual(set(results["realdebrid"]), set(HASHES))
        self.assertFalse(any(s.cached for s in results["realdebrid"].values()))
        self.assertEqual(set(results["torbox"]), set(HASHES))
        self.assertTrue(results["torbox"][HASHES[1]].cached)
        self.assertEqual(set(results["alldebrid"]), set(HASHES))
        self.assertTrue(results["alldebrid"][HASHES[2]].cached)
        await registry.aclose()

    async def test_disabled_provider_contributes_empty_map(self):
        registry = build_registry()
        torbox_only = ProviderRegistry({DebridProvider.TORBOX: registry.get(DebridProvider.TORBOX)})

        results = await check_all_caches(HASHES, torbox_only)

        self.assertEqual(results["realdebrid"], {})
        self.assertEqual(results["alldebrid"], {})
        self.assertEqual(len(results["torbox"]), 3)

    async def test_empty_hashes_skip_providers(self):
        registry = build_registry()
        for service in registry.services.values():
            service.check_cache = AsyncMock()

        results = await CacheAggregator(registry).check_cache_all([])

        self.assertEqual(results, {"realdebrid": {}, "torbox": {}, "alldebrid": {}})
        for service in registry.services.values():
            service.check_cache.assert_not_awaited()

    async def test_available_providers(self):
        registry = ProviderRegistry({DebridProvider.ALLDEBRID: AllDebridService("alldebrid-key")})
        self.assertEqual(CacheAggregator(registry).available_providers, ["alldebrid"])
        await registry.aclose()


class TestProviderRegistry(unittest.IsolatedAsyncioTestCase):
    def make_settings(self, **values):
        return Settings(_env_file=None, **values)

    async def test_enables_only_usable_credentials(self):
        settings = self.make_settings(
            USE_REAL_DEBRID=True, REAL_DEBRID_TOKEN="abcde",
            USE_TORBOX=True, TORBOX_API_KEY="torbox-key-123",
            USE_ALLDEBRID=False, ALLDEBRID_API_KEY="alldebrid-key",
        )
        async with create_debrid_services(settings) as registry:
            self.assertEqual(registry.enabled, [DebridProvider.TORBOX])
            self.assertFalse(registry.is_enabled(DebridProvider.REAL_DEBRID))
            self.assertIsNone(registry.get(DebridProvider.ALLDEBRID))
            self.assertIsInstance(registry.get(DebridProvider.TORBOX), TorboxService)
            self.assertEqual(len(registry.configured), 3)

    async def test_passes_settings_to_services(self):
        settings = self.make_settings(
            USE_REAL_DEBRID=True, REAL_DEBRID_TOKEN="rd-token-123",
            USE_ALLDEBRID=True, ALLDEBRID_API_KEY="alldebrid-key", ALLDEBRID_AGENT="myagent",
            REQUEST_TIMEOUT=5, REAL_DEBRID_BATCH_SIZE=20, REAL_DEBRID_BATCH_DELAY=1.0,
        )
        async with ProviderRegistry.from_settings(settings) as registry:
            rd = registry.get(DebridProvider.REAL_DEBRID)
            ad = registry.get(DebridProvider.ALLDEBRID)
            self.assertEqual(rd.batch_size, 20)
            self.assertEqual(rd.batch_delay, 1.0)
            self.assertEqual(rd.timeout, 5)
            self.assertEqual(ad.agent, "myagent")

    def test_settings_reject_looser_batch_limits(self):
        for values in (
            {"REAL_DEBRID_BATCH_SIZE": 0},
            {"REAL_DEBRID_BATCH_SIZE": 41},
            {"REAL_DEBRID_BATCH_DELAY": 0},
            {"REAL_DEBRID_BATCH_DELAY": 0.2},
        ):
            with self.subTest(**values):
                with self.assertRaises(ValidationError):
                    self.make_settings(USE_REAL_DEBRID=True, REAL_DEBRID_TOKEN="rd-token-123", **values)

    async def test_nothing_enabled(self):
        async with create_debrid_services(self.make_settings()) as registry:
            self.assertEqual(registry.enabled, [])
            results = await check_all_caches(HASHES, registry)
        self.assertEqual(results, {"realdebrid": {}, "torbox": {}, "alldebrid": {}})


if __name__ == '__main__':
    unittest.main()
