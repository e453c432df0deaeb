# app/extensions.py
from app.services.feed import LeaderboardFeed

feed = LeaderboardFeed()
