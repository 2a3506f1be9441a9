from datetime import datetime, timedelta, timezone

import pytest

from app.core.gamification import level_for_xp
from app.models.community_challenge import CommunityChallenge
from app.models.daily_streak import DailyStreak
from app.models.motivational_quote import MotivationalQuote
from app.models.user_settings import UserSettings
from app.services.streaks import local_today
from app.utils.dates import to_date_key, utcnow

GATED_ENDPOINTS = [
    ("get", "/api/tasks"),
    ("get", "/api/game/profile"),
    ("get", "/api/ai/history"),
    ("get", "/api/screen-usage/stats"),
    ("get", "/api/challenges"),
]


def today_key():
    return to_date_key(local_today("UTC", utcnow()))


@pytest.mark.parametrize("method, path", GATED_ENDPOINTS)
def test_expired_trial_is_refused_premium_features(client_for, make_user, method, path):
    api = client_for(make_user(age=timedelta(days=8)))
    response = getattr(api, method)(path)
    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "PREMIUM_REQUIRED"


@pytest.mark.parametrize("method, path", GATED_ENDPOINTS)
def test_trial_and_premium_users_reach_premium_features(client_for, make_user, method, path):
    for user in (make_user(age=timedelta(days=2)), make_user(age=timedelta(days=30), is_premium=True)):
        response = getattr(client_for(user), method)(path)
        assert response.status_code == 200, response.text


def test_core_timer_stays_open_after_trial(client_for, make_user):
    api = client_for(make_user(age=timedelta(days=30)))
    response = api.post("/api/timer/session", json={"type": "focus", "duration": 1500})
    assert response.status_code == 200
    assert api.get("/api/user/streak/current").json() == {"currentStreak": 0}


def test_premium_status(client_for, make_user):
    api = client_for(make_user(age=timedelta(days=2, hours=1)))
    body = api.get("/api/premium/status").json()
    assert body == {
        "isPremium": False,
        "hasAccess": True,
        "trialDaysRemaining": 5,
        "accountAge": 2,
    }


def test_premium_status_for_subscriber(client_for, make_user):
    api = client_for(make_user(age=timedelta(days=60), is_premium=True))
    body = api.get("/api/premium/status").json()
    assert body["hasAccess"] is True
    assert body["trialDaysRemaining"] == 0


def test_create_subscription_without_stripe_keys(client_for, make_user):
    api = client_for(make_user())
    response = api.post("/api/create-subscription")
    assert response.status_code == 503


def test_completing_focus_session_updates_streak_and_xp(client_for, make_user):
    api = client_for(make_user())
    session = api.post("/api/timer/session", json={"type": "focus", "duration": 1500}).json()
    assert session["isCompleted"] is False

    response = api.patch(
        f"/api/timer/session/{session['id']}",
        json={"isCompleted": True, "completedDuration": 1500},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["xpEarned"] == 25
    assert body["completedAt"] is not None

    # Re-sending completion must not count twice
    api.patch(f"/api/timer/session/{session['id']}", json={"isCompleted": True})

    streaks = api.get("/api/user/streaks").json()
    assert len(streaks) == 1
    assert streaks[0]["date"] == today_key()
    assert streaks[0]["sessionsCompleted"] == 1
    assert streaks[0]["focusTimeMinutes"] == 25
    assert streaks[0]["goalMet"] is False

    game = api.get("/api/game/profile").json()["gameData"]
    assert game["totalXp"] == 25
    assert game["currentLevel"] == 1
    assert game["xpToNextLevel"] == 75


def test_completed_session_cannot_be_reopened(client_for, make_user):
    api = client_for(make_user())
    session = api.post("/api/timer/session", json={"type": "focus", "duration": 1500}).json()
    path = f"/api/timer/session/{session['id']}"

    api.patch(path, json={"isCompleted": True, "completedDuration": 1500})
    response = api.patch(path, json={"isCompleted": False})
    assert response.status_code == 400
    api.patch(path, json={"isCompleted": True, "completedDuration": 1500})

    assert api.get("/api/timer/sessions").json()[0]["isCompleted"] is True
    assert api.get("/api/user/streaks").json()[0]["sessionsCompleted"] == 1
    assert api.get("/api/game/profile").json()["gameData"]["totalXp"] == 25


def test_completed_duration_is_capped_on_every_update(client_for, make_user):
    api = client_for(make_user())
    session = api.post("/api/timer/session", json={"type": "focus", "duration": 1500}).json()
    path = f"/api/timer/session/{session['id']}"

    assert api.patch(path, json={"completedDuration": 9999}).json()["completedDuration"] == 1500

    api.patch(path, json={"isCompleted": True})
    after = api.patch(path, json={"completedDuration": 9999}).json()
    assert after["completedDuration"] == 1500
    assert after["xpEarned"] == 25

    summary = api.get("/api/analytics/summary", params={"period": "7d"}).json()
    assert summary["totalFocusTime"] == 1500


def test_focus_completion_succeeds_when_todays_record_is_closed(client_for, make_user, db_session, monkeypatch):
    user = make_user()
    db_session.add(DailyStreak(
        user_id=user.id, date="2026-03-14", sessions_completed=1,
        focus_time_minutes=25, goal_met=False, timezone="UTC"
    ))
    db_session.add(UserSettings(user_id=user.id, timezone="Pacific/Pago_Pago"))
    db_session.commit()
    monkeypatch.setattr(
        "app.api.routes.timer.utcnow",
        lambda: datetime(2026, 3, 15, 5, 0, tzinfo=timezone.utc),
    )

    api = client_for(user)
    session = api.post("/api/timer/session", json={"type": "focus", "duration": 1500}).json()
    response = api.patch(
        f"/api/timer/session/{session['id']}",
        json={"isCompleted": True, "completedDuration": 1500},
    )
    assert response.status_code == 200
    assert response.json()["xpEarned"] == 25

    streaks = api.get("/api/user/streaks").json()
    assert [s["sessionsCompleted"] for s in streaks] == [1]


def test_completed_break_does_not_touch_streak(client_for, make_user):
    api = client_for(make_user())
    session = api.post("/api/timer/session", json={"type": "break", "duration": 300}).json()
    api.patch(f"/api/timer/session/{session['id']}", json={"isCompleted": True, "completedDuration": 300})
    assert api.get("/api/user/streaks").json() == []


def test_cannot_update_someone_elses_session(client_for, make_user):
    owner, other = make_user(), make_user()
    session = client_for(owner).post("/api/timer/session", json={"type": "focus", "duration": 60}).json()
    response = client_for(other).patch(f"/api/timer/session/{session['id']}", json={"isCompleted": True})
    assert response.status_code == 404


def test_session_range_requires_both_dates(client_for, make_user):
    api = client_for(make_user())
    assert api.get("/api/timer/sessions/range", params={"startDate": "2026-01-01"}).status_code == 400


def test_streak_endpoint_derives_goal_and_counts_today(client_for, make_user):
    api = client_for(make_user())
    response = api.post(
        "/api/user/streak",
        json={"date": today_key(), "sessionsCompleted": 5, "focusTimeMinutes": 125, "goalMet": False},
    )
    assert response.status_code == 200
    assert response.json()["goalMet"] is True
    assert api.get("/api/user/streak/current").json() == {"currentStreak": 1}


def test_streak_endpoint_rejects_past_days(client_for, make_user):
    api = client_for(make_user())
    yesterday = to_date_key(local_today("UTC", utcnow()) - timedelta(days=1))
    response = api.post("/api/user/streak", json={"date": yesterday, "sessionsCompleted": 5})
    assert response.status_code == 400


def test_streak_endpoint_keeps_closed_day_after_zone_change(client_for, make_user, db_session, monkeypatch):
    user = make_user()
    db_session.add(DailyStreak(
        user_id=user.id, date="2026-03-14", sessions_completed=1,
        focus_time_minutes=25, goal_met=False, timezone="UTC"
    ))
    db_session.commit()
    monkeypatch.setattr(
        "app.api.routes.users.utcnow",
        lambda: datetime(2026, 3, 15, 5, 0, tzinfo=timezone.utc),
    )

    api = client_for(user)
    assert api.post("/api/user/settings", json={"timezone": "Pacific/Pago_Pago"}).status_code == 200
    response = api.post(
        "/api/user/streak",
        json={"date": "2026-03-14", "sessionsCompleted": 9, "focusTimeMinutes": 225},
    )
    assert response.status_code == 400

    streaks = api.get("/api/user/streaks").json()
    assert streaks[0]["sessionsCompleted"] == 1
    assert streaks[0]["goalMet"] is False
    assert streaks[0]["timezone"] == "UTC"


def test_settings_created_with_defaults_and_updated(client_for, make_user):
    api = client_for(make_user())
    settings = api.get("/api/user/settings").json()
    assert settings["defaultSessionDuration"] == 1500
    assert settings["dailySessionGoal"] == 5
    assert settings["timezone"] == "UTC"

    updated = api.post("/api/user/settings", json={"theme": "dark", "dailySessionGoal": 3}).json()
    assert updated["theme"] == "dark"
    assert updated["dailySessionGoal"] == 3

    assert api.post("/api/user/settings", json={"timezone": "Nowhere/Land"}).status_code == 422


def test_analytics_summary(client_for, make_user):
    api = client_for(make_user())
    for kind, seconds in [("focus", 1500), ("focus", 1200), ("break", 300)]:
        session = api.post("/api/timer/session", json={"type": kind, "duration": seconds}).json()
        api.patch(f"/api/timer/session/{session['id']}", json={"isCompleted": True, "completedDuration": seconds})
    api.post("/api/timer/session", json={"type": "focus", "duration": 1500})

    body = api.get("/api/analytics/summary", params={"period": "7d"}).json()
    assert body == {
        "totalFocusTime": 2700,
        "totalBreakTime": 300,
        "completedSessions": 2,
        "completedBreaks": 1,
    }
    assert api.get("/api/analytics/summary", params={"period": "2w"}).status_code == 400


def test_random_quote(client_for, make_user, db_session):
    api = client_for(make_user())
    assert api.get("/api/quotes/random").status_code == 404

    db_session.add(MotivationalQuote(text="Starve your distractions, feed your focus.", author="Unknown"))
    db_session.commit()
    assert api.get("/api/quotes/random").json()["author"] == "Unknown"


@pytest.mark.parametrize("total, level, to_next", [(0, 1, 100), (99, 1, 1), (100, 2, 100), (250, 3, 50)])
def test_level_arithmetic(total, level, to_next):
    assert level_for_xp(total) == (level, to_next)


def test_award_xp(client_for, make_user):
    api = client_for(make_user())
    assert api.post("/api/game/xp", json={"xp": 150}).json()["currentLevel"] == 2
    body = api.post("/api/game/xp", json={"xp": 100}).json()
    assert body["totalXp"] == 250
    assert body["xpToNextLevel"] == 50
    assert api.post("/api/game/xp", json={"xp": -5}).status_code == 422


def test_tasks_are_scoped_to_their_owner(client_for, make_user):
    owner, other = make_user(), make_user()
    task = client_for(owner).post("/api/tasks", json={"title": "Mine"}).json()

    api = client_for(other)
    assert api.patch(f"/api/tasks/{task['id']}", json={"title": "Yours"}).status_code == 404
    assert api.delete(f"/api/tasks/{task['id']}").status_code == 404
    response = api.post("/api/timer/session", json={"type": "focus", "duration": 60, "taskId": task["id"]})
    assert response.status_code == 404


def test_task_crud_and_focus_time(client_for, make_user):
    api = client_for(make_user())
    task = api.post("/api/tasks", json={"title": "Write report", "priority": "high"}).json()
    assert task["priority"] == "high"
    assert task["sessionCount"] == 0

    session = api.post("/api/timer/session", json={"type": "focus", "duration": 600, "taskId": task["id"]}).json()
    api.patch(f"/api/timer/session/{session['id']}", json={"isCompleted": True, "completedDuration": 600})

    tasks = api.get("/api/tasks").json()
    assert tasks[0]["totalFocusTime"] == 600
    assert tasks[0]["sessionCount"] == 1

    done = api.patch(f"/api/tasks/{task['id']}", json={"isCompleted": True}).json()
    assert done["isCompleted"] is True
    assert done["completedAt"] is not None

    assert api.delete(f"/api/tasks/{task['id']}").json() == {"success": True}
    assert api.get("/api/tasks").json() == []


def test_ai_chat_context_replies_and_history(client_for, make_user):
    api = client_for(make_user())
    pause = api.post("/api/ai/chat", json={"message": "I keep stopping", "context": "pause"}).json()
    assert pause["response"].startswith("Taking breaks is normal!")
    general = api.post("/api/ai/chat", json={"message": "Help"}).json()
    assert "Pomodoro" in general["response"]

    history = api.get("/api/ai/history").json()
    assert len(history) == 4
    assert sum(1 for m in history if m["isUserMessage"]) == 2


def test_screen_usage_stats(client_for, make_user):
    api = client_for(make_user())
    api.post("/api/screen-usage", json={"distractionCount": 2, "focusTime": 600, "awayTime": 200})
    api.post("/api/screen-usage", json={"distractionCount": 1, "focusTime": 200, "awayTime": 0})

    stats = api.get("/api/screen-usage/stats").json()
    assert len(stats["logs"]) == 2
    assert stats["totalDistractions"] == 3
    assert stats["totalFocusTime"] == 800
    assert stats["totalAwayTime"] == 200
    assert stats["focusRatio"] == pytest.approx(0.8)


def test_join_challenge(client_for, make_user, db_session):
    api = client_for(make_user())
    now = utcnow()
    challenge = CommunityChallenge(
        title="Focus Sprint",
        description="Ten sessions this week",
        target_sessions=10,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=6),
        xp_reward=100,
    )
    db_session.add(challenge)
    db_session.commit()

    active = api.get("/api/challenges").json()
    assert [c["id"] for c in active] == [challenge.id]

    progress = api.post(f"/api/challenges/{challenge.id}/join").json()
    assert progress["currentSessions"] == 0
    assert progress["isCompleted"] is False

    entries = api.get("/api/challenges/progress").json()
    assert entries[0]["challenge"]["title"] == "Focus Sprint"
    assert api.post("/api/challenges/missing/join").status_code == 404
