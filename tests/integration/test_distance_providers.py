"""Integration tests for the distance providers against mocked HTTP APIs."""

import json

import httpx
import pytest

from install_scheduling.application.interfaces.providers import DistanceMatrixRequest
from install_scheduling.application.services.distance_cache import DistanceCache
from install_scheduling.application.services.distance_service import DistanceService
from install_scheduling.domain.exceptions.distance_error import (
    DistanceLookupError,
    DistanceProviderConfigurationError,
    DistanceProviderError,
)
from install_scheduling.infrastructure.providers.distance_api.provider import (
    HttpDistanceProvider,
)
from install_scheduling.infrastructure.providers.factory import ProviderFactory
from install_scheduling.infrastructure.providers.mapbox.client import MapboxClient
from install_scheduling.infrastructure.providers.mapbox.provider import (
    MapboxDistanceProvider,
)

CENTERS = {
    "SW1A 1AA": [-0.1419, 51.5010],
    "E1 6AN": [-0.0722, 51.5200],
    "M1 1AE": [-2.2374, 53.4810],
}


class MapboxStub:
    """Answers geocoding, directions and matrix calls like Mapbox does."""

    def __init__(self):
        self.requests = []
        self.status_code = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "Not Authorized"})

        if path.startswith("/geocoding/"):
            postcode = path.rsplit("/", 1)[-1][: -len(".json")]
            center = CENTERS.get(postcode)
            features = [{"center": center}] if center else []
            return httpx.Response(200, json={"features": features})

        if path.startswith("/directions/"):
            return httpx.Response(
                200, json={"routes": [{"distance": 6759.2, "duration": 1260.0}]}
            )

        if path.startswith("/directions-matrix/"):
            return httpx.Response(
                200,
                json={
                    "distances": [[6759.2, 321869.0]],
                    "durations": [[1260.0, 14400.0]],
                },
            )

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.mark.integration
class TestMapboxDistanceProvider:
    """Integration tests for the Mapbox provider."""

    @pytest.fixture
    def stub(self):
        return MapboxStub()

    @pytest.fixture
    def provider(self, stub):
        client = MapboxClient(
            access_token="test-token",
            base_url="https://api.mapbox.test",
            transport=httpx.MockTransport(stub),
        )
        return MapboxDistanceProvider(client)

    @pytest.mark.asyncio
    async def test_single_pair_uses_directions(self, provider, stub):
        matrix = await provider.get_distance_matrix(
            DistanceMatrixRequest(origins=["sw1a 1aa"], destinations=["E1 6AN"])
        )

        assert matrix.method == "mapbox_directions"
        assert matrix.distance_at(0, 0) == 4.2
        assert matrix.duration_at(0, 0) == 21.0

        paths = [r.url.path for r in stub.requests]
        assert paths[0] == "/geocoding/v5/mapbox.places/SW1A 1AA.json"
        assert paths[2].startswith("/directions/v5/mapbox/driving/-0.1419,51.501;")
        assert stub.requests[0].url.params["access_token"] == "test-token"
        assert stub.requests[0].url.params["country"] == "GB"

    @pytest.mark.asyncio
    async def test_many_destinations_use_matrix(self, provider, stub):
        matrix = await provider.get_distance_matrix(
            DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN", "M1 1AE"])
        )

        assert matrix.method == "mapbox_matrix"
        assert matrix.distances == [[4.2, 200.0]]
        assert matrix.durations == [[21.0, 240.0]]

        matrix_request = stub.requests[-1]
        assert matrix_request.url.params["sources"] == "0"
        assert matrix_request.url.params["destinations"] == "1;2"

    @pytest.mark.asyncio
    async def test_unknown_postcode_raises(self, provider):
        with pytest.raises(DistanceProviderError, match="geocode"):
            await provider.get_distance_matrix(
                DistanceMatrixRequest(origins=["ZZ9 9ZZ"], destinations=["E1 6AN"])
            )

    @pytest.mark.asyncio
    async def test_api_error_raises(self, provider, stub):
        stub.status_code = 401

        with pytest.raises(DistanceProviderError, match="401"):
            await provider.get_distance_matrix(
                DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN"])
            )

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def broken(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = MapboxClient("test-token", transport=httpx.MockTransport(broken))
        provider = MapboxDistanceProvider(client)

        with pytest.raises(DistanceProviderError, match="network error"):
            await provider.get_distance_matrix(
                DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN"])
            )

    @pytest.mark.parametrize("body", [b"[]", b"null", b"\"ok\""])
    @pytest.mark.asyncio
    async def test_non_object_body_is_lookup_failure(self, body):
        client = MapboxClient(
            "test-token",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(
                    200, content=body, headers={"content-type": "application/json"}
                )
            ),
        )
        service = DistanceService(MapboxDistanceProvider(client), DistanceCache())

        with pytest.raises(DistanceLookupError, match="instead of an object"):
            await service.lookup("SW1A 1AA", "E1 6AN")

    @pytest.mark.asyncio
    async def test_error_status_with_array_body(self):
        client = MapboxClient(
            "test-token",
            transport=httpx.MockTransport(lambda request: httpx.Response(503, json=[])),
        )
        provider = MapboxDistanceProvider(client)

        with pytest.raises(DistanceProviderError, match="503 - Unknown error"):
            await provider.get_distance_matrix(
                DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN"])
            )

    def test_missing_token_rejected(self):
        with pytest.raises(DistanceProviderConfigurationError):
            MapboxDistanceProvider(MapboxClient(access_token=None))

    @pytest.mark.asyncio
    async def test_distance_service_over_mapbox(self, provider, stub):
        service = DistanceService(provider, DistanceCache())

        first = await service.lookup("SW1A 1AA", "E1 6AN")
        second = await service.lookup("E1 6AN", "SW1A 1AA")

        assert first.distance_miles == 4.2
        assert first.travel_minutes == 21
        assert second.cached is True
        # two geocodes and one directions call, once
        assert len(stub.requests) == 3

    @pytest.mark.asyncio
    async def test_distance_service_wraps_provider_errors(self, provider, stub):
        stub.status_code = 500
        service = DistanceService(provider, DistanceCache())

        with pytest.raises(DistanceLookupError):
            await service.lookup("SW1A 1AA", "E1 6AN")


@pytest.mark.integration
class TestHttpDistanceProvider:
    """Integration tests for the generic HTTP distance endpoint."""

    def _provider(self, handler):
        return HttpDistanceProvider(
            "https://distance.test/matrix", transport=httpx.MockTransport(handler)
        )

    @pytest.mark.asyncio
    async def test_posts_origins_and_destinations(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"distances": [[12.5]], "durations": [[25]]})

        matrix = await self._provider(handler).get_distance_matrix(
            DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN"])
        )

        assert seen == [{"origins": ["SW1A 1AA"], "destinations": ["E1 6AN"]}]
        assert matrix.distance_at(0, 0) == 12.5
        assert matrix.duration_at(0, 0) == 25
        assert matrix.method == "distance_api"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(503, text="unavailable"),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json={"error": "quota exceeded"}),
            httpx.Response(200, json={"rows": []}),
        ],
    )
    async def test_bad_responses_raise(self, response):
        provider = self._provider(lambda request: response)

        with pytest.raises(DistanceProviderError):
            await provider.get_distance_matrix(
                DistanceMatrixRequest(origins=["SW1A 1AA"], destinations=["E1 6AN"])
            )

    def test_missing_endpoint_rejected(self):
        with pytest.raises(DistanceProviderConfigurationError):
            HttpDistanceProvider(None)


class TestProviderFactory:
    """Test cases for ProviderFactory."""

    def test_creates_configured_provider(self, test_settings):
        provider = ProviderFactory().create_provider(test_settings)
        assert provider.name == "mapbox"

    def test_http_without_url_fails(self, test_settings):
        settings = test_settings.model_copy(update={"DISTANCE_PROVIDER": "http"})

        with pytest.raises(DistanceProviderConfigurationError):
            ProviderFactory().create_provider(settings)

    def test_available_providers(self):
        assert ProviderFactory().get_available_providers() == ["mapbox", "http"]
