"""
Unit Tests for Changelog and Item Schemas
"""
from dataclasses import asdict
from datetime import datetime

from app.schemas.changelog import ChangelogResponse, ChangelogStats
from app.schemas.work_item import ItemResponse
from app.services.item_store import WorkItemRecord


class TestChangelogSchemas:
    """Wire shape of the changelog response"""

    def test_stats_serialize_camel_case(self):
        stats = ChangelogStats(bug_fixed=2, feature_added=1, feature_updated=0)

        assert stats.model_dump(by_alias=True) == {
            'bugFixed': 2,
            'featureAdded': 1,
            'featureUpdated': 0,
        }

    def test_stats_default_zero(self):
        assert ChangelogStats().model_dump(by_alias=True) == {
            'bugFixed': 0,
            'featureAdded': 0,
            'featureUpdated': 0,
        }

    def test_response_error_optional(self):
        response = ChangelogResponse(data='No changelog yet', stats=ChangelogStats())

        assert response.error is None


class TestItemResponse:
    """Item responses are built from store records"""

    def test_from_record(self):
        record = WorkItemRecord(
            id='item-1',
            title='Crash on save',
            type='bug',
            status='done',
            category_id='cat-1',
            created_at=datetime(2024, 5, 1, 9, 30),
            category_name='Editor',
        )

        response = ItemResponse.model_validate(record, from_attributes=True)

        assert response.model_dump() == {**asdict(record)}
        assert response.category_name == 'Editor'
        assert response.image_url is None
