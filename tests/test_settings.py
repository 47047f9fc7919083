"""Tests for settings reconciliation and the settings service."""

import pytest

from weigh_in.models.user_settings import (
    DEFAULT_CHART_METRICS,
    DEFAULT_TABLE_METRICS,
    UserSettings,
)
from weigh_in.services.settings import (
    SettingsError,
    SettingsService,
    ensure_date_first,
    is_valid_goal_weight,
    merge_settings,
)


class TestEnsureDateFirst:
    """Tests for ensure_date_first."""

    def test_adds_missing_date(self):
        assert ensure_date_first(["Weight", "BMI"]) == ["Date", "Weight", "BMI"]

    def test_moves_date_to_front(self):
        assert ensure_date_first(["Weight", "Date", "BMI"]) == ["Date", "Weight", "BMI"]

    def test_collapses_duplicate_dates(self):
        assert ensure_date_first(["Date", "Weight", "Date"]) == ["Date", "Weight"]

    def test_empty(self):
        assert ensure_date_first([]) == ["Date"]


class TestGoalWeight:
    """Tests for goal weight validation."""

    @pytest.mark.parametrize("value", [None, 175, 175.5, 0.1])
    def test_valid(self, value):
        assert is_valid_goal_weight(value)

    @pytest.mark.parametrize("value", [0, -10, "175", True, [175]])
    def test_invalid(self, value):
        assert not is_valid_goal_weight(value)


class TestMergeSettings:
    """Tests for merge_settings."""

    def test_empty_payload_changes_nothing(self):
        settings = UserSettings(goal_weight=170.0, dark_mode=True)
        before = settings.to_dict()

        merge_settings(settings, {})

        assert settings.to_dict() == before

    def test_table_metrics_get_date_first(self):
        settings = merge_settings(UserSettings(), {"tableMetrics": ["Weight", "BMI"]})
        assert settings.table_metrics == ["Date", "Weight", "BMI"]

    def test_non_list_metrics_are_ignored(self):
        settings = merge_settings(
            UserSettings(),
            {"tableMetrics": "Weight", "chartMetrics": None, "defaultVisibleMetrics": 3},
        )

        assert settings.table_metrics == DEFAULT_TABLE_METRICS
        assert settings.chart_metrics == DEFAULT_CHART_METRICS
        assert settings.default_visible_metrics == ["Weight"]

    def test_chart_and_visible_metrics_are_replaced(self):
        settings = merge_settings(
            UserSettings(),
            {"chartMetrics": ["Weight", "HR"], "defaultVisibleMetrics": ["HR"]},
        )

        assert settings.chart_metrics == ["Weight", "HR"]
        assert settings.default_visible_metrics == ["HR"]

    def test_explicit_null_clears_goal_weight(self):
        """A present null is applied, unlike an absent key."""
        settings = UserSettings(goal_weight=170.0)

        merge_settings(settings, {"darkMode": True})
        assert settings.goal_weight == 170.0

        merge_settings(settings, {"goalWeight": None})
        assert settings.goal_weight is None

    def test_invalid_goal_weight_is_ignored(self):
        settings = UserSettings(goal_weight=170.0)
        merge_settings(settings, {"goalWeight": -5})
        assert settings.goal_weight == 170.0

    def test_dark_mode_requires_bool(self):
        settings = UserSettings()

        merge_settings(settings, {"darkMode": "true"})
        assert settings.dark_mode is False

        merge_settings(settings, {"darkMode": True})
        assert settings.dark_mode is True


class TestSettingsService:
    """Tests for SettingsService against a temporary database."""

    async def test_first_read_creates_defaults(self, db_path):
        service = SettingsService(db_path)

        settings = await service.get_user_settings()

        assert settings.user_id == "default"
        assert settings.table_metrics == DEFAULT_TABLE_METRICS
        assert settings.chart_metrics == DEFAULT_CHART_METRICS
        assert settings.created_at is not None

    async def test_update_persists(self, db_path):
        service = SettingsService(db_path)

        await service.update_user_settings(
            updates={"tableMetrics": ["Weight", "Date", "HR"], "goalWeight": 172.5}
        )
        settings = await SettingsService(db_path).get_user_settings()

        assert settings.table_metrics == ["Date", "Weight", "HR"]
        assert settings.goal_weight == 172.5

    async def test_update_without_payload_keeps_document(self, db_path):
        service = SettingsService(db_path)
        before = (await service.get_user_settings()).to_dict()

        after = await service.update_user_settings()

        assert after.table_metrics == before["tableMetrics"]
        assert after.goal_weight == before["goalWeight"]

    async def test_reset_keeps_dark_mode(self, db_path):
        service = SettingsService(db_path)
        await service.update_user_settings(
            updates={
                "chartMetrics": ["HR"],
                "defaultVisibleMetrics": ["HR"],
                "goalWeight": 160,
                "darkMode": True,
            }
        )

        settings = await service.reset_user_settings()

        assert settings.chart_metrics == DEFAULT_CHART_METRICS
        assert settings.default_visible_metrics == ["Weight"]
        assert settings.goal_weight is None
        assert settings.dark_mode is True

    async def test_users_are_independent(self, db_path):
        service = SettingsService(db_path)
        await service.update_user_settings("alice", {"darkMode": True})

        bob = await service.get_user_settings("bob")
        alice = await service.get_user_settings("alice")

        assert bob.dark_mode is False
        assert alice.dark_mode is True

    async def test_missing_schema_raises_settings_error(self, temp_db_path):
        service = SettingsService(temp_db_path)

        with pytest.raises(SettingsError):
            await service.get_user_settings()
