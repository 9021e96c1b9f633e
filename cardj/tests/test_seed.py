import unittest

from fastapi.testclient import TestClient

from cardj.app import create_app
from cardj.config import Settings
from cardj.db import InMemoryDbClient, SqlDbClient
from cardj.schema import NewPlatform, NewTrack
from cardj.seed import DEMO_PLAYLISTS, seed_demo_catalog


class SeedDemoCatalogTests(unittest.TestCase):
    def test_seeds_once(self):
        db = InMemoryDbClient()
        self.assertTrue(seed_demo_catalog(db))
        self.assertFalse(seed_demo_catalog(db))

        self.assertEqual(
            [p.name for p in db.get_platforms()],
            ["Spotify", "Apple Music", "YouTube Music"],
        )
        self.assertEqual(len(db.get_playlists()), len(DEMO_PLAYLISTS))

    def test_skips_store_with_only_inactive_platforms_and_tracks(self):
        db = InMemoryDbClient()
        retired = db.create_platform(NewPlatform(name="Retired", icon="x", active=False))
        db.create_track(NewTrack(title="Loose", artist="A", platform_id=retired.id))

        self.assertFalse(seed_demo_catalog(db))
        self.assertEqual(db.get_platforms(), [])
        self.assertEqual([t.title for t in db.get_tracks()], ["Loose"])

    def test_reseeding_after_demo_platforms_retired_is_a_no_op(self):
        db = InMemoryDbClient()
        seed_demo_catalog(db)
        for platform in db.platforms.values():
            platform.active = False

        self.assertFalse(seed_demo_catalog(db))
        self.assertEqual(len(db.get_playlists()), len(DEMO_PLAYLISTS))

    def test_playlist_tracks_follow_play_order(self):
        db = SqlDbClient("sqlite+pysqlite:///:memory:")
        seed_demo_catalog(db)
        for playlist, (name, _, _, titles) in zip(db.get_playlists(), DEMO_PLAYLISTS):
            self.assertEqual(playlist.name, name)
            self.assertEqual(playlist.song_count, len(titles))
            tracks = db.get_tracks_by_playlist_id(playlist.id)
            self.assertEqual([t.title for t in tracks], titles)
        db.engine.dispose()

    def test_app_seeds_when_enabled(self):
        settings = Settings(_env_file=None, use_in_memory_backends=True, seed_demo_data=True)
        client = TestClient(create_app(settings=settings))
        playlists = client.get("/api/playlists").json()
        self.assertEqual([p["name"] for p in playlists], [p[0] for p in DEMO_PLAYLISTS])


if __name__ == "__main__":
    unittest.main()
