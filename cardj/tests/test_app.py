import unittest

from fastapi.testclient import TestClient

from cardj.app import create_app
from cardj.config import Settings
from cardj.db import InMemoryDbClient
from cardj.schema import NewPlatform, NewPlaylist, NewRecommendation, NewTrack

REGISTRATION = {
    "username": "ana",
    "email": "ana@mail.com",
    "password": "correct-horse",
    "confirmPassword": "correct-horse",
}


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(
            _env_file=None, use_in_memory_backends=True, seed_demo_data=False
        )
        self.db = InMemoryDbClient()
        self.client = TestClient(create_app(settings=self.settings, db=self.db))

    def _register(self, **overrides):
        payload = dict(REGISTRATION)
        payload.update(overrides)
        return self.client.post("/api/register", json=payload)

    def test_health_reports_storage_mode(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "storage": "in_memory"})

    def test_register_logs_user_in(self):
        response = self._register()
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["username"], "ana")
        self.assertEqual(payload["email"], "ana@mail.com")
        self.assertIn("createdAt", payload)
        self.assertNotIn("password", payload)
        self.assertIn(self.settings.session_cookie_name, response.cookies)

        me = self.client.get("/api/user")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["id"], payload["id"])

        stored = self.db.get_user(payload["id"])
        self.assertNotEqual(stored.password, REGISTRATION["password"])

    def test_register_duplicate_email(self):
        self.assertEqual(self._register().status_code, 201)
        response = self._register(username="other")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Email already registered")

    def test_register_duplicate_username(self):
        self.assertEqual(self._register().status_code, 201)
        response = self._register(email="other@mail.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Username already registered")

    def test_register_validation(self):
        self.assertEqual(self._register(confirmPassword="different").status_code, 422)
        self.assertEqual(
            self._register(password="short", confirmPassword="short").status_code, 422
        )
        self.assertEqual(self._register(email="not-an-email").status_code, 422)
        self.assertEqual(self.db.users, {})

    def test_register_password_limit_counts_bytes(self):
        # 40 characters, 80 bytes in UTF-8.
        too_long = "é" * 40
        response = self._register(password=too_long, confirmPassword=too_long)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.db.users, {})

        fits = "é" * 36
        response = self._register(password=fits, confirmPassword=fits)
        self.assertEqual(response.status_code, 201)
        login = self.client.post(
            "/api/login", json={"email": "ana@mail.com", "password": fits}
        )
        self.assertEqual(login.status_code, 200)

    def test_login_and_logout(self):
        self._register()
        self.client.post("/api/logout")
        self.assertEqual(self.client.get("/api/user").status_code, 401)

        bad = self.client.post(
            "/api/login", json={"email": "ana@mail.com", "password": "wrong-password"}
        )
        self.assertEqual(bad.status_code, 401)
        unknown = self.client.post(
            "/api/login", json={"email": "bob@mail.com", "password": "correct-horse"}
        )
        self.assertEqual(unknown.status_code, 401)

        good = self.client.post(
            "/api/login", json={"email": "ana@mail.com", "password": "correct-horse"}
        )
        self.assertEqual(good.status_code, 200)
        self.assertEqual(good.json()["username"], "ana")
        self.assertEqual(self.client.get("/api/user").status_code, 200)

        logout = self.client.post("/api/logout")
        self.assertEqual(logout.json(), {"status": "ok"})
        self.assertEqual(self.client.get("/api/user").status_code, 401)

    def test_stale_session_cookie_is_anonymous(self):
        self.client.cookies.set(self.settings.session_cookie_name, "forged")
        self.assertEqual(self.client.get("/api/user").status_code, 401)

    def test_catalog_endpoints(self):
        spotify = self.db.create_platform(NewPlatform(name="Spotify", icon="spotify"))
        self.db.create_platform(NewPlatform(name="Gone", icon="x", active=False))
        playlist = self.db.create_playlist(
            NewPlaylist(name="Drive", platform_id=spotify.id, cover_image="cover.jpg")
        )
        tracks = [
            self.db.create_track(NewTrack(title=title, artist="BTS"))
            for title in ("Dynamite", "Butter", "Spring Day")
        ]
        for position, track in zip([3, 1, 2], tracks):
            self.db.add_track_to_playlist(playlist.id, track.id, position)

        platforms = self.client.get("/api/platforms").json()
        self.assertEqual([p["name"] for p in platforms], ["Spotify"])
        self.assertNotIn("apiKey", platforms[0])

        self.assertEqual(self.client.get(f"/api/platforms/{spotify.id}").status_code, 200)
        by_platform = self.client.get(f"/api/platforms/{spotify.id}/playlists").json()
        self.assertEqual([p["id"] for p in by_platform], [playlist.id])

        listed = self.client.get("/api/playlists").json()
        self.assertEqual(listed[0]["coverImage"], "cover.jpg")
        self.assertEqual(listed[0]["songCount"], 3)
        self.assertEqual(listed[0]["platformId"], spotify.id)

        ordered = self.client.get(f"/api/playlists/{playlist.id}/tracks").json()
        self.assertEqual([t["title"] for t in ordered], ["Butter", "Spring Day", "Dynamite"])

        self.assertEqual(len(self.client.get("/api/tracks").json()), 3)
        track = self.client.get(f"/api/tracks/{tracks[0].id}").json()
        self.assertEqual(track["title"], "Dynamite")

    def test_not_found_responses(self):
        for path in (
            "/api/platforms/99",
            "/api/platforms/99/playlists",
            "/api/playlists/99",
            "/api/playlists/99/tracks",
            "/api/tracks/99",
        ):
            with self.subTest(path=path):
                self.assertEqual(self.client.get(path).status_code, 404)

    def test_recommendations_require_login(self):
        self.assertEqual(self.client.get("/api/recommendations").status_code, 401)
        self.assertEqual(self.client.get("/api/user/playlists").status_code, 401)

    def test_recommendations_for_current_user(self):
        user_id = self._register().json()["id"]
        tracks = [
            self.db.create_track(NewTrack(title=f"Song {i}", artist="Artist"))
            for i in range(6)
        ]
        self.db.create_recommendation(
            NewRecommendation(user_id=user_id, track_id=tracks[4].id, reason="New for you")
        )

        response = self.client.get("/api/recommendations")
        self.assertEqual(response.status_code, 200)
        ids = [t["id"] for t in response.json()]
        self.assertEqual(len(ids), 5)
        self.assertEqual(ids[0], tracks[4].id)

    def test_user_playlists(self):
        user_id = self._register().json()["id"]
        mine = self.db.create_playlist(NewPlaylist(name="Mine", user_id=user_id))
        self.db.create_playlist(NewPlaylist(name="Public"))

        response = self.client.get("/api/user/playlists")
        self.assertEqual([p["id"] for p in response.json()], [mine.id])


if __name__ == "__main__":
    unittest.main()
