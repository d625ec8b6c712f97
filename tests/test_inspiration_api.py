from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from main import app
from src.models.profile import CurrentUser
from src.services.inspiration_service import inspiration_service, title_from_content

from fake_backend import AUTH, TOKEN, USER_ID, FakeBackend


class TestInspirationApi(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeBackend()
        self.fake.add_user(display_name="Faye")
        self.fake.install()
        self.client = TestClient(app)

    def test_title_is_first_three_words(self) -> None:
        self.assertEqual(title_from_content("Learn watercolor painting this spring"), "Learn watercolor painting")
        self.assertEqual(title_from_content("Yoga"), "Yoga")

    def test_capture(self) -> None:
        res = self.client.post("/api/inspirations", headers=AUTH, json={
            "content": "  Build a balcony garden with herbs ",
            "category": "nature",
        })
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["code"], 0)
        stored = self.fake.tables["inspirations"][0]
        self.assertEqual(stored["user_id"], USER_ID)
        self.assertEqual(stored["title"], "Build a balcony")
        self.assertEqual(stored["content"], "Build a balcony garden with herbs")
        self.assertEqual(stored["category"], "nature")
        self.assertFalse(stored["is_practiced"])

    def test_capture_without_category(self) -> None:
        self.client.post("/api/inspirations", headers=AUTH, json={"content": "Sourdough", "category": ""})
        self.assertIsNone(self.fake.tables["inspirations"][0]["category"])

    def test_capture_validation(self) -> None:
        res = self.client.post("/api/inspirations", headers=AUTH, json={"content": "   "})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["msg"], "Please enter your idea")
        res = self.client.post("/api/inspirations", headers=AUTH, json={"content": "x", "category": "sports"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.fake.tables["inspirations"], [])

    def test_filter_practiced(self) -> None:
        self.fake.seed("inspirations", title="Morning Yoga", content="Morning Yoga", is_practiced=True)
        self.fake.seed("inspirations", title="French Lessons", content="French Lessons", is_practiced=False)
        self.fake.seed("inspirations", title="Balcony Garden", content="Balcony Garden", is_practiced=True)

        def titles(flt):
            res = self.client.get("/api/inspirations", headers=AUTH, params={"filter": flt})
            return [i["title"] for i in res.json()["data"]]

        self.assertEqual(titles("all"), ["Balcony Garden", "French Lessons", "Morning Yoga"])
        self.assertEqual(titles("practiced"), ["Balcony Garden", "Morning Yoga"])
        self.assertEqual(titles("unpracticed"), ["French Lessons"])

        res = self.client.get("/api/inspirations", headers=AUTH, params={"filter": "maybe"})
        self.assertEqual(res.status_code, 400)

    def test_bubble_map(self) -> None:
        self.fake.seed("inspirations", title="Yoga", content="Yoga", category="fitness", is_practiced=True)
        self.fake.seed("inspirations", title="Run", content="Run a 10k", category="fitness", is_practiced=False)
        self.fake.seed("inspirations", title="Paint", content="Paint", category="art", is_practiced=False)

        data = self.client.get("/api/inspirations/map", headers=AUTH).json()["data"]
        self.assertEqual(len(data["bubbles"]), 3)
        self.assertEqual(len(data["connections"]), 1)

        data = self.client.get("/api/inspirations/map", headers=AUTH, params={"filter": "practiced"}).json()["data"]
        self.assertEqual([b["title"] for b in data["bubbles"]], ["Yoga"])
        self.assertEqual(data["connections"], [])

    def test_toggle_edit_delete(self) -> None:
        row = self.fake.seed("inspirations", title="Meditation", content="Meditation", is_practiced=False)

        res = self.client.post(f"/api/inspirations/{row['id']}/toggle", headers=AUTH)
        self.assertEqual(res.status_code, 200)
        self.assertTrue(row["is_practiced"])
        self.assertEqual(res.json()["msg"], "Marked as practiced")

        res = self.client.patch(f"/api/inspirations/{row['id']}", headers=AUTH,
                                json={"content": "Meditate ten minutes daily", "category": "fitness"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(row["title"], "Meditate ten minutes")
        self.assertEqual(row["category"], "fitness")

        res = self.client.delete(f"/api/inspirations/{row['id']}", headers=AUTH)
        self.assertEqual(res.status_code, 200)
        res = self.client.post(f"/api/inspirations/{row['id']}/toggle", headers=AUTH)
        self.assertEqual(res.status_code, 404)

    def test_capture_form_options(self) -> None:
        data = self.client.get("/api/inspirations/capture").json()["data"]
        self.assertEqual(len(data["categories"]), 9)
        self.assertIn("#weekend", data["quick_tags"])



class TestInspirationQueries(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.fake = FakeBackend()
        self.fake.add_user()
        self.fake.install()
        self.user = CurrentUser(id=USER_ID, token=TOKEN)

    async def test_limit_applies_after_practiced_filter(self) -> None:
        self.fake.seed("inspirations", title="Yoga", content="Yoga", is_practiced=True)
        self.fake.seed("inspirations", title="French", content="French", is_practiced=False)

        items = await inspiration_service.get_inspirations(self.user, "practiced", limit=1)
        self.assertEqual([i.title for i in items], ["Yoga"])
        self.assertEqual(self.fake.requests[-1].url.params["is_practiced"], "eq.true")

        items = await inspiration_service.get_inspirations(self.user, "unpracticed", limit=1)
        self.assertEqual([i.title for i in items], ["French"])

        items = await inspiration_service.get_inspirations(self.user, limit=1)
        self.assertEqual([i.title for i in items], ["French"])
        self.assertNotIn("is_practiced", self.fake.requests[-1].url.params)


if __name__ == "__main__":
    unittest.main()
