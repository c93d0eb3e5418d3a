"""
Integration Tests - category to changelog round trip through the HTTP API
"""
import pytest
from httpx import AsyncClient


async def create_item(client: AsyncClient, category_id: str, title: str, item_type: str) -> dict:
    response = await client.post(
        '/api/v1/items',
        data={'title': title, 'category_id': category_id, 'type': item_type}
    )
    assert response.status_code == 201
    return response.json()['data']


class TestTrackerFlow:
    """A release cycle driven entirely through the API"""

    @pytest.mark.asyncio
    async def test_release_cycle(self, client: AsyncClient):
        response = await client.post('/api/v1/categories', json={'name': 'Editor'})
        category_id = response.json()['data']['id']

        crash = await create_item(client, category_id, 'Crash on save', 'bug')
        dark = await create_item(client, category_id, 'Dark mode', 'new_feature')
        search = await create_item(client, category_id, 'Faster search', 'feature_update')
        await create_item(client, category_id, 'Spell check', 'new_feature')

        # Nothing is done yet
        changelog = (await client.get('/api/v1/changelog')).json()
        assert changelog['data'] == 'No changelog yet'

        for item in (crash, dark, search):
            await client.patch(f"/api/v1/items/{item['id']}", json={'status': 'in_progress'})
            response = await client.patch(f"/api/v1/items/{item['id']}", json={'status': 'done'})
            assert response.json()['data']['status'] == 'done'

        changelog = (await client.get('/api/v1/changelog')).json()
        assert changelog['data'] == (
            'BUG FIXED:\n'
            '1. Fix: Crash on save\n'
            '\n'
            'ADD FEATURE:\n'
            '1. Add: Dark mode\n'
            '\n'
            'CHANGES:\n'
            '1. Changes: Faster search\n'
        )
        assert changelog['stats'] == {'bugFixed': 1, 'featureAdded': 1, 'featureUpdated': 1}

        # Deleting a done item drops it from the next changelog
        await client.delete(f"/api/v1/items/{dark['id']}")
        changelog = (await client.get('/api/v1/changelog')).json()
        assert 'ADD FEATURE:' not in changelog['data']
        assert changelog['stats']['featureAdded'] == 0

        download = await client.get('/api/v1/changelog/download')
        assert download.text == changelog['data']

    @pytest.mark.asyncio
    async def test_items_listing_carries_category_name(self, client: AsyncClient):
        response = await client.post('/api/v1/categories', json={'name': 'Billing'})
        category_id = response.json()['data']['id']
        await create_item(client, category_id, 'Invoice rounding', 'bug')

        items = (await client.get('/api/v1/items')).json()['data']

        assert len(items) == 1
        assert items[0]['category_name'] == 'Billing'
        assert items[0]['category_id'] == category_id
