"""Tests for container wiring."""

from calio.containers import build_container
from calio.domain.goals import GoalDraft


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.food_log_service.preset_service is container.preset_service
    assert container.stats_service.repository is container.food_log_service.repository
    assert container.goal_service.default_calorie_goal == 2000
    assert container.user_settings_service.goal_service is container.goal_service


def test_container_fixture_logs_and_evaluates(container, user_id) -> None:
    container.goal_service.save_goal(user_id, GoalDraft(daily_calories=2000))
    container.food_log_service.quick_add(user_id, 500, "UTC")

    totals = container.stats_service.get_today(user_id, "UTC")
    goal = container.goal_service.get_current_goal(user_id)
    result = container.goal_service.evaluate(totals, goal)

    assert result.calories_used == 500
    assert result.calories_remaining == 1500
