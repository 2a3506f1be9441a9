#!/usr/bin/env python3
"""
Reference data seeder: achievements catalogue, motivational quotes and an
optional community challenge.

Existing rows are left alone (achievements by id, quotes by text), so the
script can be re-run after every deploy. Run from project root:
  python scripts/seed_data.py
  python scripts/seed_data.py --challenge-days 14

Requires: DATABASE_URL in environment (.env or export). Falls back to the
local SQLite file used by the app when it is not set.
"""

from __future__ import annotations

import argparse
import os
import sys
from datetime import timedelta
from pathlib import Path

# Run from project root; ensure app is importable
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv(project_root / ".env")

# Optional: normalize postgres:// -> postgresql:// for SQLAlchemy
_database_url = os.getenv("DATABASE_URL")
if _database_url and _database_url.startswith("postgres://"):
    os.environ["DATABASE_URL"] = "postgresql://" + _database_url[10:]

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.community_challenge import CommunityChallenge
from app.models.game_data import Achievement
from app.models.motivational_quote import MotivationalQuote
from app.utils.dates import utcnow

ACHIEVEMENTS = [
    # id, title, description, xp_reward, icon, category, requirement
    ("first_focus", "First Focus", "Complete your first focus session", 10, "star", "sessions", 1),
    ("ten_sessions", "Getting Serious", "Complete 10 focus sessions", 50, "target", "sessions", 10),
    ("hundred_sessions", "Centurion", "Complete 100 focus sessions", 250, "trophy", "sessions", 100),
    ("five_hours", "Deep Worker", "Accumulate 5 hours of focus time", 100, "zap", "hours", 5),
    ("streak_3", "On a Roll", "Keep a 3 day streak", 30, "medal", "streak", 3),
    ("streak_7", "Week Warrior", "Keep a 7 day streak", 75, "award", "streak", 7),
]

QUOTES = [
    ("The secret of getting ahead is getting started.", "Mark Twain", "motivation"),
    ("It always seems impossible until it's done.", "Nelson Mandela", "motivation"),
    ("Concentrate all your thoughts upon the work at hand.", "Alexander Graham Bell", "focus"),
    ("Starve your distractions, feed your focus.", "Unknown", "focus"),
    ("Small daily improvements are the key to staggering long-term results.", "Unknown", "habits"),
    ("Rest is not idleness.", "John Lubbock", "breaks"),
]


def seed_achievements(sess) -> int:
    existing = {row[0] for row in sess.query(Achievement.id).all()}
    added = 0
    for slug, title, description, xp_reward, icon, category, requirement in ACHIEVEMENTS:
        if slug in existing:
            continue
        sess.add(Achievement(
            id=slug,
            title=title,
            description=description,
            xp_reward=xp_reward,
            icon=icon,
            category=category,
            requirement=requirement,
            is_active=True,
        ))
        added += 1
    return added


def seed_quotes(sess) -> int:
    existing = {row[0] for row in sess.query(MotivationalQuote.text).all()}
    added = 0
    for text, author, category in QUOTES:
        if text in existing:
            continue
        sess.add(MotivationalQuote(text=text, author=author, category=category, is_active=True))
        added += 1
    return added


def seed_challenge(sess, days: int) -> None:
    now = utcnow()
    sess.add(CommunityChallenge(
        title=f"{days}-Day Focus Sprint",
        description=f"Complete {days * 2} focus sessions in the next {days} days.",
        target_sessions=days * 2,
        start_date=now,
        end_date=now + timedelta(days=days),
        xp_reward=days * 10,
        is_active=True,
    ))


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed achievements, quotes and a community challenge.")
    parser.add_argument(
        "--challenge-days",
        type=int,
        default=0,
        help="Also create a community challenge running this many days from now",
    )
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)

    sess = SessionLocal()
    try:
        print(f"Achievements added: {seed_achievements(sess)}")
        print(f"Quotes added: {seed_quotes(sess)}")
        if args.challenge_days > 0:
            seed_challenge(sess, args.challenge_days)
            print(f"Challenge added: {args.challenge_days} days")
        sess.commit()
        print("\nDone. Reference data seeded.")
    except Exception as e:
        sess.rollback()
        print(f"ERROR: {e}")
        raise
    finally:
        sess.close()


if __name__ == "__main__":
    main()
