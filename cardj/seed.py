"""
Demo catalog used to populate an empty store for local development.
"""

from __future__ import annotations

import logging

from cardj.db import DbClient
from cardj.schema import NewPlatform, NewPlaylist, NewTrack

logger = logging.getLogger(__name__)

DEMO_PLATFORMS = [
    NewPlatform(name="Spotify", icon="spotify"),
    NewPlatform(name="Apple Music", icon="apple-music"),
    NewPlatform(name="YouTube Music", icon="youtube-music"),
    NewPlatform(name="SoundCloud", icon="soundcloud", active=False),
]

DEMO_TRACKS = [
    NewTrack(title="Blue Bird", artist="IKIMONO-GAKARI", album="Bleach OST", duration=240, genre="J-Pop"),
    NewTrack(title="Dynamite", artist="BTS", album="BE", duration=199, genre="K-Pop"),
    NewTrack(title="Butter", artist="BTS", album="Butter", duration=164, genre="K-Pop"),
    NewTrack(title="How You Like That", artist="BLACKPINK", album="THE ALBUM", duration=182, genre="K-Pop"),
    NewTrack(title="Spring Day", artist="BTS", album="You Never Walk Alone", duration=285, genre="K-Pop"),
    NewTrack(title="Gurenge", artist="LiSA", album="LEO-NiNE", duration=238, genre="J-Pop"),
]

# (playlist name, platform name, description, track titles in play order)
DEMO_PLAYLISTS = [
    ("Road Trip Anthems", "Spotify", "High energy for the highway", ["Dynamite", "Butter", "How You Like That"]),
    ("Anime Openings", "YouTube Music", "Sing-along openings", ["Gurenge", "Blue Bird"]),
    ("Late Night Drive", "Apple Music", None, ["Spring Day", "Blue Bird", "Butter"]),
]


def seed_demo_catalog(db: DbClient) -> bool:
    """
    Insert demo platforms, tracks and playlists.

    Does nothing when the store already holds an active platform, a track or a
    playlist. Returns True if data was inserted.
    """
    if db.get_platforms() or db.get_tracks() or db.get_playlists():
        logger.info("Catalog already present; skipping demo seed")
        return False

    platforms = {p.name: db.create_platform(p) for p in DEMO_PLATFORMS}
    tracks = {t.title: db.create_track(t) for t in DEMO_TRACKS}
    for name, platform_name, description, titles in DEMO_PLAYLISTS:
        playlist = db.create_playlist(
            NewPlaylist(
                name=name,
                platform_id=platforms[platform_name].id,
                description=description,
            )
        )
        for position, title in enumerate(titles, start=1):
            db.add_track_to_playlist(playlist.id, tracks[title].id, position)

    logger.info(
        "Seeded %d platforms, %d tracks, %d playlists",
        len(platforms),
        len(tracks),
        len(DEMO_PLAYLISTS),
    )
    return True
