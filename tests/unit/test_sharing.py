"""Tests for sharing links, chat members and item properties."""
import aiohttp
import pytest

from conftest import TEST_TOKEN, SITE_ID, json_response, text_response
from graphshare.core.exceptions import HttpError, ValidationError
from graphshare.core.sharing import (
    ChatMember,
    ChatMemberResolver,
    DriveItemPropertyFetcher,
    MemberResolution,
    SharingLinkService,
    SharingScope
)
from graphshare.core.upload.models import UploadTarget

LINK = {"link": {"webUrl": "https://contoso/share/abc", "type": "view"}}


class TestSharingLinkService:
    """Test suite for SharingLinkService."""

    @pytest.fixture
    def service(self, api):
        return SharingLinkService(api)

    @pytest.mark.asyncio
    async def test_organization_link_personal(self, service, transport):
        """Test organization links use the v1.0 API on /me/drive."""
        transport.queue(json_response(200, LINK))

        link = await service.create_link(UploadTarget.personal(), "item-1")

        assert link.web_url == "https://contoso/share/abc"
        assert link.scope is SharingScope.ORGANIZATION
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url == "https://graph.microsoft.com/v1.0/me/drive/items/item-1/createLink"
        assert request.json() == {"type": "view", "scope": "organization"}
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_anonymous_link(self, service, transport):
        transport.queue(json_response(200, LINK))

        link = await service.create_link(UploadTarget.personal(), "item-1", "anonymous")

        assert link.scope is SharingScope.ANONYMOUS
        assert transport.requests[0].json() == {"type": "view", "scope": "anonymous"}

    @pytest.mark.asyncio
    async def test_users_link_uses_beta_with_recipients(self, service, transport):
        """Test per-user links go to the beta API with recipient object IDs."""
        transport.queue(json_response(200, LINK))

        link = await service.create_link(
            UploadTarget.site(SITE_ID), "item-1", SharingScope.USERS, ["aad-1", "aad-2"]
        )

        assert link.scope is SharingScope.USERS
        request = transport.requests[0]
        assert request.url == (
            f"https://graph.microsoft.com/beta/sites/{SITE_ID}/drive/items/item-1/createLink"
        )
        assert request.json() == {
            "type": "view",
            "scope": "users",
            "recipients": [{"objectId": "aad-1"}, {"objectId": "aad-2"}],
        }

    @pytest.mark.asyncio
    async def test_users_link_requires_recipients(self, service, transport):
        with pytest.raises(ValueError, match="recipient"):
            await service.create_link(UploadTarget.site(SITE_ID), "item-1", SharingScope.USERS, [])
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_unknown_scope_rejected(self, service):
        with pytest.raises(ValueError):
            await service.create_link(UploadTarget.personal(), "item-1", "everyone")

    @pytest.mark.asyncio
    async def test_http_error(self, service, transport):
        transport.queue(text_response(403, "accessDenied", "Forbidden"))

        with pytest.raises(HttpError) as exc_info:
            await service.create_link(UploadTarget.site(SITE_ID), "item-1")

        assert exc_info.value.status == 403
        assert exc_info.value.phase == "Create SharePoint sharing link"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"link": {}}, {"link": {"webUrl": ""}}, {"link": "x"}])
    async def test_missing_web_url(self, service, transport, payload):
        transport.queue(json_response(200, payload))

        with pytest.raises(ValidationError) as exc_info:
            await service.create_link(UploadTarget.personal(), "item-1")

        assert exc_info.value.missing == ("link.webUrl",)


class TestChatMemberResolver:
    """Test suite for ChatMemberResolver."""

    @pytest.fixture
    def resolver(self, api):
        return ChatMemberResolver(api)

    @pytest.mark.asyncio
    async def test_get_members(self, resolver, transport):
        """Test members without userId are dropped."""
        transport.queue(json_response(200, {"value": [
            {"userId": "aad-1", "displayName": "Ada"},
            {"displayName": "Bot without id"},
            {"userId": "", "displayName": "Empty"},
            {"userId": "aad-2"},
        ]}))

        members = await resolver.get_members("chat-1")

        assert members == [
            ChatMember(aad_object_id="aad-1", display_name="Ada"),
            ChatMember(aad_object_id="aad-2", display_name=None),
        ]
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url == "https://graph.microsoft.com/v1.0/chats/chat-1/members"
        assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"

    @pytest.mark.asyncio
    async def test_get_members_empty(self, resolver, transport):
        transport.queue(json_response(200, {}))

        assert await resolver.get_members("chat-1") == []

    @pytest.mark.asyncio
    async def test_get_members_http_error_propagates(self, resolver, transport):
        """Test the resolver itself does not fall back."""
        transport.queue(text_response(403, "Missing Chat.Read.All", "Forbidden"))

        with pytest.raises(HttpError) as exc_info:
            await resolver.get_members("chat-1")

        assert exc_info.value.phase == "Get chat members"

    @pytest.mark.asyncio
    async def test_resolve_success(self, resolver, transport):
        transport.queue(json_response(200, {"value": [{"userId": "aad-1"}]}))

        resolution = await resolver.resolve("chat-1")

        assert resolution.has_recipients
        assert resolution.recipient_ids == ("aad-1",)
        assert resolution.error is None

    @pytest.mark.asyncio
    async def test_resolve_failure_as_value(self, resolver, transport):
        transport.queue(text_response(403, "denied", "Forbidden"))

        resolution = await resolver.resolve("chat-1")

        assert not resolution.has_recipients
        assert isinstance(resolution.error, HttpError)
        assert resolution.members == ()

    @pytest.mark.asyncio
    async def test_resolve_captures_network_error(self, resolver, transport):
        """Test transport exceptions are reported as a value too."""
        error = aiohttp.ClientConnectionError("connection reset")

        async def failing_request(method, url, *, headers=None, data=None):
            raise error

        transport.request = failing_request

        resolution = await resolver.resolve("chat-1")

        assert not resolution.has_recipients
        assert resolution.error is error

    def test_empty_resolution(self):
        assert not MemberResolution().has_recipients


class TestDriveItemPropertyFetcher:
    """Test suite for DriveItemPropertyFetcher."""

    @pytest.fixture
    def fetcher(self, api):
        return DriveItemPropertyFetcher(api)

    @pytest.mark.asyncio
    async def test_get_site_item_properties(self, fetcher, transport):
        transport.queue(json_response(200, {
            "eTag": "\"{ABC},1\"",
            "webDavUrl": "https://contoso/dav/report.pdf",
            "name": "report.pdf",
        }))

        properties = await fetcher.get_site_item_properties(SITE_ID, "item-1")

        assert properties.etag == "\"{ABC},1\""
        assert properties.webdav_url == "https://contoso/dav/report.pdf"
        assert properties.name == "report.pdf"
        assert transport.requests[0].url == (
            f"https://graph.microsoft.com/v1.0/sites/{SITE_ID}/drive/items/item-1"
            "?$select=eTag,webDavUrl,name"
        )

    @pytest.mark.asyncio
    async def test_personal_target(self, fetcher, transport):
        transport.queue(json_response(200, {"eTag": "e", "webDavUrl": "w", "name": "n"}))

        await fetcher.get_properties(UploadTarget.personal(), "item-1")

        assert transport.requests[0].url.startswith(
            "https://graph.microsoft.com/v1.0/me/drive/items/item-1?"
        )

    @pytest.mark.asyncio
    async def test_partial_response_rejected(self, fetcher, transport):
        """Test partial properties are a contract violation."""
        transport.queue(json_response(200, {"eTag": "e", "name": "n"}))

        with pytest.raises(ValidationError) as exc_info:
            await fetcher.get_site_item_properties(SITE_ID, "item-1")

        assert exc_info.value.missing == ("webDavUrl",)

    @pytest.mark.asyncio
    async def test_http_error(self, fetcher, transport):
        transport.queue(text_response(404, "itemNotFound", "Not Found"))

        with pytest.raises(HttpError, match="404"):
            await fetcher.get_site_item_properties(SITE_ID, "item-1")
