from __future__ import annotations

import unittest
from datetime import datetime

from fastapi.testclient import TestClient

from main import app
from src.api.sections import resolve_section
from src.models.profile import CurrentUser
from src.services.dashboard_service import dashboard_service
from src.utils.config import settings

from fake_backend import AUTH, TOKEN, USER_ID, FakeBackend


class TestSections(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeBackend()
        self.fake.add_user(display_name="Faye")
        self.fake.install()
        self.client = TestClient(app)

    def test_navigation(self) -> None:
        data = self.client.get("/api/sections").json()["data"]
        self.assertEqual([i["id"] for i in data["items"]], ["dashboard", "diary", "inspiration", "tasks"])
        self.assertEqual(data["default"], "dashboard")

    def test_unknown_section_falls_back_to_dashboard(self) -> None:
        self.assertEqual(resolve_section("settings"), "dashboard")
        self.assertEqual(resolve_section(None), "dashboard")
        self.assertEqual(resolve_section("tasks"), "tasks")

        data = self.client.get("/api/sections/settings", headers=AUTH).json()["data"]
        self.assertEqual(data["section"], "dashboard")
        self.assertIn("greeting", data["content"])

    def test_each_section_renders(self) -> None:
        self.fake.seed("diary_entries", entry_date="2026-10-12", title="Got promoted!", content="yay", mood="happy")
        self.fake.seed("inspirations", title="Yoga", content="Yoga", is_practiced=True)

        diary = self.client.get("/api/sections/diary", headers=AUTH).json()["data"]
        self.assertEqual(diary["view"], "input")
        self.assertEqual(diary["content"]["mood"], "happy")

        canvas = self.client.get("/api/sections/diary", headers=AUTH, params={"view": "canvas"}).json()["data"]
        self.assertEqual(canvas["content"]["notes"][0]["title"], "Got promoted!")

        library = self.client.get("/api/sections/inspiration", headers=AUTH, params={"view": "library"}).json()["data"]
        self.assertEqual(library["content"]["bubbles"][0]["title"], "Yoga")

        tasks = self.client.get("/api/sections/tasks", headers=AUTH).json()["data"]
        self.assertEqual(tasks["content"]["greeting"], "Hello, Faye.")

        res = self.client.get("/api/sections/diary", headers=AUTH, params={"view": "library"})
        self.assertEqual(res.status_code, 400)

    def test_view_is_ignored_for_sections_without_views(self) -> None:
        tasks = self.client.get("/api/sections/tasks", headers=AUTH, params={"view": "bogus"})
        self.assertEqual(tasks.status_code, 200)
        self.assertIsNone(tasks.json()["data"]["view"])

        fallback = self.client.get("/api/sections/settings", headers=AUTH, params={"view": "canvas"}).json()["data"]
        self.assertEqual(fallback["section"], "dashboard")
        self.assertIsNone(fallback["view"])

    def test_client_local_time_drives_dashboard(self) -> None:
        self.fake.seed("tasks", task_date="2026-10-19", title="Morning Yoga", completed=False)
        self.fake.seed("tasks", task_date="2026-10-18", title="Yesterday", completed=False)
        params = {"now": "2026-10-19T07:00:00+08:00"}

        data = self.client.get("/api/dashboard", headers=AUTH, params=params).json()["data"]
        self.assertEqual(data["greeting"], "Good Morning, Faye")
        self.assertEqual(data["date_label"], "Monday, October 19th")
        self.assertEqual([t["title"] for t in data["tasks"]["items"]], ["Morning Yoga"])

        section = self.client.get("/api/sections/dashboard", headers=AUTH, params=params).json()["data"]
        self.assertEqual(section["content"]["greeting"], "Good Morning, Faye")

        board = self.client.get("/api/sections/tasks", headers=AUTH, params=params).json()["data"]
        self.assertEqual(board["content"]["task_date"], "2026-10-19")

        res = self.client.get("/api/dashboard", headers=AUTH, params={"now": "teatime"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["code"], 1)

    def test_sections_require_login(self) -> None:
        res = self.client.get("/api/sections/dashboard")
        self.assertEqual(res.status_code, 401)

    def test_health(self) -> None:
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "healthy")
        self.assertTrue(body["backend_configured"])


class TestDashboard(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.fake = FakeBackend()
        self.fake.add_user(display_name="Faye")
        self.fake.install()
        self.user = CurrentUser(id=USER_ID, token=TOKEN)

    async def test_overview(self) -> None:
        now = datetime(2026, 10, 19, 20, 30)
        self.fake.seed("diary_entries", entry_date="2026-10-18", content="yesterday", mood="happy")
        for i, done in enumerate([False, True, False, False]):
            self.fake.seed("tasks", task_date="2026-10-19", title=f"Task {i}",
                           scheduled_time=f"0{i + 6}:00:00", completed=done)
        for i in range(5):
            self.fake.seed("inspirations", title=f"Idea {i}", content=f"Idea {i}", is_practiced=False)

        overview = await dashboard_service.get_overview(self.user, now=now)

        self.assertEqual(overview["greeting"], "Good Evening, Faye")
        self.assertEqual(overview["date_label"], "Monday, October 19th")
        self.assertEqual(overview["selected_mood"], "inspired")
        self.assertEqual([m["id"] for m in overview["moods"] if m["selected"]], ["inspired"])
        self.assertEqual(overview["diary"]["last_entry_label"], "Yesterday")
        self.assertEqual(len(overview["tasks"]["items"]), 3)
        self.assertEqual(overview["tasks"]["items"][0]["title"], "Task 0")
        self.assertEqual(overview["tasks"]["progress"]["completed"], 1)
        self.assertEqual(overview["tasks"]["progress"]["total"], 4)
        self.assertEqual([i["title"] for i in overview["inspirations"]], ["Idea 4", "Idea 3", "Idea 2"])

    async def test_empty_overview(self) -> None:
        overview = await dashboard_service.get_overview(self.user, mood="calm",
                                                        now=datetime(2026, 10, 19, 9, 0))
        self.assertEqual(overview["greeting"], "Good Morning, Faye")
        self.assertEqual(overview["diary"]["last_entry_label"], "No entries yet")
        self.assertIsNone(overview["diary"]["last_entry"])
        self.assertEqual(overview["tasks"]["progress"]["percent"], 0.0)
        self.assertEqual(overview["selected_mood"], "calm")


class TestProfile(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeBackend()
        self.fake.install()
        self.client = TestClient(app)

    def test_profile_display_name(self) -> None:
        self.fake.add_user(display_name="Faye")
        data = self.client.get("/api/profile", headers=AUTH).json()["data"]
        self.assertEqual(data, {"id": USER_ID, "display_name": "Faye"})

    def test_missing_profile_falls_back(self) -> None:
        self.fake.add_user(metadata_name="Fei")
        data = self.client.get("/api/profile", headers=AUTH).json()["data"]
        self.assertEqual(data["display_name"], "Fei")

        self.fake.users.clear()
        self.fake.add_user()
        data = self.client.get("/api/profile", headers=AUTH).json()["data"]
        self.assertEqual(data["display_name"], settings.default_display_name)


if __name__ == "__main__":
    unittest.main()
