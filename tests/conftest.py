"""Pytest configuration and fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from photo_carousel.settings import AppSettings, CarouselYamlSettings, EnvSettings, PhotosSettings

PHOTOS_URL = "https://jsonplaceholder.typicode.com/photos"


def make_photo(index: int, album_id: int = 1) -> dict[str, Any]:
    return {
        "albumId": album_id,
        "id": index,
        "title": f"photo number {index}",
        "url": f"https://via.placeholder.com/600/{index:06x}",
        "thumbnailUrl": f"https://via.placeholder.com/150/{index:06x}",
    }


EXAMPLE_PHOTO: dict[str, Any] = {
    "albumId": 1,
    "id": 1,
    "title": "accusamus beatae ad facilis cum similique qui sunt",
    "url": "https://via.placeholder.com/600/92c952",
    "thumbnailUrl": "https://via.placeholder.com/150/92c952",
}


class RecordingTransport(httpx.MockTransport):
    """Mock upstream that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        env=EnvSettings(carousel_env="test"),
        yaml=CarouselYamlSettings(),
        project_root=Path.cwd(),
        config_path=Path("config/photo_carousel.yaml"),
    )


@pytest.fixture
def lenient_settings(settings: AppSettings) -> AppSettings:
    yaml_settings = CarouselYamlSettings(photos=PhotosSettings(empty_result_is_error=False))
    return settings.model_copy(update={"yaml": yaml_settings})


@pytest.fixture
def json_transport() -> Callable[[Any], RecordingTransport]:
    def factory(payload: Any, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))

    return factory
