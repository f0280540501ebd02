import json

import pytest
from httpx import Response

from acube_mcp.tools.configurations import (
    create_appointee,
    create_business_registry,
    get_appointee,
    get_business_registry,
    list_appointees,
    list_business_registries,
    update_appointee,
    update_business_registry,
)
from acube_mcp.tools.webhooks import (
    create_webhook_config,
    delete_webhook_config,
    get_webhook_config,
    list_webhook_configs,
    update_webhook_config,
)

from conftest import API


def _text(result):
    return result.content[0].text


@pytest.mark.asyncio
async def test_list_webhook_configs(client, api):
    api.get(f"{API}/api-configurations").mock(
        return_value=Response(200, json=[{"id": "w-1", "event": "receipt", "authentication_token": None}])
    )

    async with client:
        result = await list_webhook_configs(client)

    assert _text(result) == '[{"id":"w-1","event":"receipt"}]'


@pytest.mark.asyncio
async def test_create_webhook_config_omits_unset_auth(client, api):
    route = api.post(f"{API}/api-configurations").mock(
        return_value=Response(201, json={"id": "w-1"})
    )

    async with client:
        await create_webhook_config(client, "customer-invoice", "https://hook.example.com/in")
        await create_webhook_config(
            client,
            "receipt",
            "https://hook.example.com/r",
            authentication_type="header",
            authentication_key="X-Token",
            authentication_token="t0k",
        )

    assert json.loads(route.calls[0].request.content) == {
        "event": "customer-invoice",
        "target_url": "https://hook.example.com/in",
    }
    assert json.loads(route.calls[1].request.content) == {
        "event": "receipt",
        "target_url": "https://hook.example.com/r",
        "authentication_type": "header",
        "authentication_key": "X-Token",
        "authentication_token": "t0k",
    }


@pytest.mark.asyncio
async def test_get_update_delete_webhook_config(client, api):
    api.get(f"{API}/api-configurations/w-1").mock(return_value=Response(200, json={"id": "w-1"}))
    put = api.put(f"{API}/api-configurations/w-1").mock(
        return_value=Response(200, json={"id": "w-1", "event": "job"})
    )
    delete = api.delete(f"{API}/api-configurations/w-1").mock(return_value=Response(204))

    async with client:
        got = await get_webhook_config(client, "w-1")
        updated = await update_webhook_config(client, "w-1", {"event": "job"})
        deleted = await delete_webhook_config(client, "w-1")

    assert _text(got) == '{"id":"w-1"}'
    assert json.loads(put.calls[0].request.content) == {"event": "job"}
    assert _text(updated) == '{"id":"w-1","event":"job"}'
    assert delete.called
    assert not deleted.isError


@pytest.mark.asyncio
async def test_webhook_error(client, api):
    api.delete(f"{API}/api-configurations/nope").mock(return_value=Response(404, text="Not Found"))

    async with client:
        result = await delete_webhook_config(client, "nope")

    assert result.isError
    assert _text(result) == "Acube API error (404): Not Found"


@pytest.mark.asyncio
async def test_business_registry_tools(client, api):
    base = f"{API}/business-registry-configurations"
    api.get(base).mock(return_value=Response(200, json=[{"fiscal_id": "123"}]))
    create = api.post(base).mock(return_value=Response(201, json={"fiscal_id": "123"}))
    api.get(f"{base}/123").mock(return_value=Response(200, json={"fiscal_id": "123", "email": None}))
    update = api.put(f"{base}/123").mock(return_value=Response(200, json={"fiscal_id": "123"}))

    async with client:
        listed = await list_business_registries(client)
        await create_business_registry(client, {"fiscal_id": "123", "name": "ACME"})
        got = await get_business_registry(client, "123")
        await update_business_registry(client, "123", {"receipts": True})

    assert _text(listed) == '[{"fiscal_id":"123"}]'
    assert json.loads(create.calls[0].request.content) == {"fiscal_id": "123", "name": "ACME"}
    assert _text(got) == '{"fiscal_id":"123"}'
    assert json.loads(update.calls[0].request.content) == {"receipts": True}


@pytest.mark.asyncio
async def test_appointee_tools(client, api):
    base = f"{API}/ade-appointees"
    api.get(base).mock(return_value=Response(200, json=[]))
    create = api.post(base).mock(return_value=Response(201, json={"id": "a-1"}))
    api.get(f"{base}/a-1").mock(return_value=Response(200, json={"id": "a-1"}))
    update = api.put(f"{base}/a-1").mock(return_value=Response(200, json={"id": "a-1"}))

    async with client:
        listed = await list_appointees(client)
        created = await create_appointee(client, {"fiscal_id": "RSSMRA"})
        got = await get_appointee(client, "a-1")
        await update_appointee(client, "a-1", {"password": "new"})

    assert _text(listed) == "[]"
    assert json.loads(create.calls[0].request.content) == {"fiscal_id": "RSSMRA"}
    assert _text(created) == '{"id":"a-1"}'
    assert _text(got) == '{"id":"a-1"}'
    assert json.loads(update.calls[0].request.content) == {"password": "new"}
