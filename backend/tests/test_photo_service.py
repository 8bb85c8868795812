"""
Photo service tests

Run:
    pytest tests/test_photo_service.py -v
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from cache import Namespace, cache_key
from photo.service import CachedPhoto, get_photo, guess_content_type

AVATAR_URL = "https://alice.example/avatar"
PNG = b"\x89PNG\r\n\x1a\nfake-png-bytes"


def png_response(headers=None) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Type": "image/png", **(headers or {})}, content=PNG)


class TestGuessContentType:

    def test_origin_image_type_wins(self):
        assert guess_content_type("https://x.example/a.jpg", "image/png; charset=binary") == "image/png"

    def test_extension_when_origin_is_not_an_image(self):
        assert guess_content_type("https://x.example/a.gif?s=64", "application/octet-stream") == "image/gif"

    def test_default(self):
        assert guess_content_type("https://x.example/avatar") == "image/jpeg"


class TestGetPhoto:

    @pytest.mark.asyncio
    async def test_cache_hit_keeps_content_type(self, make_context):
        calls = []
        ctx = make_context({AVATAR_URL: png_response({"Last-Modified": "Wed, 01 May 2024 12:00:00 GMT"})}, calls)

        await get_photo(ctx, AVATAR_URL)
        cached = await get_photo(ctx, AVATAR_URL)

        assert calls == [AVATAR_URL]
        assert cached.content == PNG
        assert cached.content_type == "image/png"
        assert cached.last_modified == "Wed, 01 May 2024 12:00:00 GMT"

    @pytest.mark.asyncio
    async def test_corrupted_entry_is_refetched(self, make_context, memory_store):
        calls = []
        ctx = make_context({AVATAR_URL: png_response()}, calls, memory_store)
        expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
        await memory_store.set(cache_key(Namespace.PHOTO, AVATAR_URL), b"\xff\xd8raw-jpeg", expires_at)

        photo = await get_photo(ctx, AVATAR_URL)

        assert calls == [AVATAR_URL]
        assert photo.content == PNG
        assert photo.content_type == "image/png"
        stored, _ = await memory_store.get(cache_key(Namespace.PHOTO, AVATAR_URL))
        assert CachedPhoto.from_json(stored).content_type == "image/png"
