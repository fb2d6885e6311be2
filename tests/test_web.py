"""HTTP tests against the real application with get_db bound to an in-memory SQLite database."""

import unittest
from datetime import datetime
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from poseidon.core.config import settings
from poseidon.core.database import get_db
from poseidon.core.security import hash_password
from poseidon.main import app
from poseidon.models import Base, BidList, CurvePoint, Rating, User
from poseidon.services.access import FORBIDDEN_MESSAGE
from poseidon.services.auth import AutoLoginAuthenticator, CredentialAuthenticator

ADMIN_PASSWORD = "Adm1n!pass"
USER_PASSWORD = "Us3r!pass"


class WebTestCase(unittest.TestCase):
    """Fresh database and client per test; subclasses choose the authentication mode."""

    auth_enabled = True

    def setUp(self) -> None:
        rounds = patch("poseidon.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.Session = sessionmaker(bind=engine, autoflush=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)

        previous = app.state.authenticator
        app.state.authenticator = (
            CredentialAuthenticator(settings)
            if self.auth_enabled
            else AutoLoginAuthenticator(settings)
        )
        self.addCleanup(setattr, app.state, "authenticator", previous)

        with self.Session() as db:
            db.add_all(
                [
                    User(
                        username="admin",
                        fullname="Administrator",
                        role="ADMIN",
                        password_hash=hash_password(ADMIN_PASSWORD),
                    ),
                    User(
                        username="bob",
                        fullname="Bob",
                        role="USER",
                        password_hash=hash_password(USER_PASSWORD),
                    ),
                ]
            )
            db.commit()

        self.client = TestClient(app, follow_redirects=False)

    def login(self, username: str, password: str):
        return self.client.post("/login", data={"username": username, "password": password})

    def add_bid(self, account: str) -> int:
        with self.Session() as db:
            bid = BidList(account=account, type="T", bid_quantity=1.0)
            db.add(bid)
            db.commit()
            return bid.id


class TestLogin(WebTestCase):
    """Login and logout pages."""

    def test_login_page_is_public(self) -> None:
        response = self.client.get("/login")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["view"], "login")

    def test_successful_login_redirects_and_sets_session(self) -> None:
        response = self.login("admin", ADMIN_PASSWORD)
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], settings.LOGIN_SUCCESS_URL)
        self.assertIn(settings.SESSION_COOKIE_NAME, response.cookies)
        self.assertEqual(self.client.get("/bidList/list").status_code, 200)

    def test_failed_login_is_indistinguishable(self) -> None:
        wrong_password = self.login("admin", "nope")
        unknown_user = self.login("ghost", ADMIN_PASSWORD)
        for response in (wrong_password, unknown_user):
            self.assertEqual(response.status_code, 303)
            self.assertEqual(response.headers["location"], "/login?error")
        self.assertNotIn(settings.SESSION_COOKIE_NAME, self.client.cookies)

    def test_login_error_flag_is_shown(self) -> None:
        response = self.client.get("/login?error")
        self.assertTrue(response.context["error"])
        self.assertIn("Invalid username or password.", response.text)

    def test_logout_clears_session(self) -> None:
        self.login("bob", USER_PASSWORD)
        response = self.client.get("/logout")
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login?logout")
        self.assertEqual(self.client.get("/bidList/list").status_code, 302)


class TestAccessControl(WebTestCase):
    """Guard redirects and role checks over HTTP."""

    def test_anonymous_request_redirects_to_login(self) -> None:
        response = self.client.get("/bidList/list")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/login")

    def test_public_routes_need_no_session(self) -> None:
        self.assertEqual(self.client.get("/static/css/app.css").status_code, 200)
        self.assertEqual(self.client.get("/health/").status_code, 200)

    def test_user_management_requires_admin(self) -> None:
        self.login("bob", USER_PASSWORD)
        response = self.client.get("/user/list")
        self.assertEqual(response.status_code, 403)
        self.assertIn(FORBIDDEN_MESSAGE, response.text)

    def test_admin_reaches_user_management(self) -> None:
        self.login("admin", ADMIN_PASSWORD)
        response = self.client.get("/user/list")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["view"], "user/list")
        self.assertEqual([u.username for u in response.context["users"]], ["admin", "bob"])
        self.assertNotIn("password_hash", response.text)

    def test_error_page(self) -> None:
        response = self.client.get("/error")
        self.assertEqual(response.status_code, 403)
        self.assertIn(FORBIDDEN_MESSAGE, response.text)


class TestBidListPages(WebTestCase):
    """Bid list pages end to end, including flash messages."""

    def setUp(self) -> None:
        super().setUp()
        self.login("bob", USER_PASSWORD)

    def test_list_shows_records_in_order(self) -> None:
        self.add_bid("A1")
        self.add_bid("A2")
        response = self.client.get("/bidList/list")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["view"], "bidList/list")
        self.assertEqual([b.account for b in response.context["bidLists"]], ["A1", "A2"])

    def test_create_then_flash_is_shown_once(self) -> None:
        response = self.client.post(
            "/bidList/validate", data={"account": "A1", "type": "T", "bid_quantity": "10"}
        )
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/bidList/list")

        page = self.client.get("/bidList/list")
        self.assertIn("Bid added successfully.", page.text)
        self.assertIn("A1", page.text)
        self.assertNotIn("Bid added successfully.", self.client.get("/bidList/list").text)

        with self.Session() as db:
            stored = db.query(BidList).one()
            self.assertEqual(stored.creation_name, "bob")

    def test_invalid_update_rerenders_form(self) -> None:
        bid_id = self.add_bid("A1")
        response = self.client.post(
            f"/bidList/update/{bid_id}",
            data={"account": "", "type": "T", "bid_quantity": "100"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["view"], "bidList/update")
        self.assertIn("account", response.context["errors"])
        self.assertIn("Account is mandatory.", response.text)
        with self.Session() as db:
            self.assertEqual(db.get(BidList, bid_id).account, "A1")

    def test_update_uses_path_id(self) -> None:
        bid_id = self.add_bid("A1")
        other_id = self.add_bid("A2")
        response = self.client.post(
            f"/bidList/update/{bid_id}",
            data={"id": str(other_id), "account": "B1", "type": "T", "bid_quantity": "3"},
        )
        self.assertEqual(response.status_code, 303)
        with self.Session() as db:
            self.assertEqual(db.get(BidList, bid_id).account, "B1")
            self.assertEqual(db.get(BidList, other_id).account, "A2")

    def test_delete_missing_record_flashes_error(self) -> None:
        response = self.client.get("/bidList/delete/999")
        self.assertEqual(response.status_code, 303)
        self.assertIn("No such bid with id 999.", self.client.get("/bidList/list").text)

    def test_delete_existing_record(self) -> None:
        bid_id = self.add_bid("A1")
        self.client.get(f"/bidList/delete/{bid_id}")
        with self.Session() as db:
            self.assertIsNone(db.get(BidList, bid_id))

    def test_ids_beyond_integer_range_are_reported_as_missing(self) -> None:
        huge = "99999999999999999999"
        for url in (f"/bidList/update/{huge}", f"/bidList/delete/{huge}"):
            with self.subTest(url=url):
                response = self.client.get(url)
                self.assertEqual(response.status_code, 303)
                self.assertEqual(response.headers["location"], "/bidList/list")
                self.assertIn(f"No such bid with id {huge}.", self.client.get("/bidList/list").text)
        response = self.client.post(
            f"/bidList/update/{huge}", data={"account": "A", "type": "T", "bid_quantity": "1"}
        )
        self.assertEqual(response.status_code, 303)


class TestUserPages(WebTestCase):
    """User management pages as an admin."""

    def setUp(self) -> None:
        super().setUp()
        self.login("admin", ADMIN_PASSWORD)

    def test_create_user_with_duplicate_name(self) -> None:
        response = self.client.post(
            "/user/validate",
            data={"username": "bob", "password": "An0ther!pw", "fullname": "Bob 2", "role": "USER"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("Username bob already exists.", response.text)

    def test_create_user_then_login(self) -> None:
        response = self.client.post(
            "/user/validate",
            data={"username": "carol", "password": "Car0l!pass", "fullname": "Carol", "role": "USER"},
        )
        self.assertEqual(response.status_code, 303)
        self.client.get("/logout")
        self.assertEqual(self.login("carol", "Car0l!pass").headers["location"], settings.LOGIN_SUCCESS_URL)

    def test_padded_username_is_trimmed_and_can_log_in(self) -> None:
        response = self.client.post(
            "/user/validate",
            data={"username": " carol ", "password": "Car0l!pass", "fullname": "Carol", "role": "USER"},
        )
        self.assertEqual(response.status_code, 303)
        with self.Session() as db:
            self.assertEqual(db.query(User).filter(User.username == "carol").count(), 1)
        self.client.get("/logout")
        for spelling in ("carol", " carol "):
            with self.subTest(username=spelling):
                response = self.login(spelling, "Car0l!pass")
                self.assertEqual(response.headers["location"], settings.LOGIN_SUCCESS_URL)

    def test_padded_lookalike_username_is_rejected(self) -> None:
        response = self.client.post(
            "/user/validate",
            data={"username": "bob ", "password": "An0ther!pw", "fullname": "Bob 2", "role": "ADMIN"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("Username bob already exists.", response.text)
        with self.Session() as db:
            self.assertEqual(db.query(User).count(), 2)


class TestOtherKinds(WebTestCase):
    """Curve points, ratings and rules written through the forms and read back from the database."""

    def setUp(self) -> None:
        super().setUp()
        self.login("bob", USER_PASSWORD)

    def test_curve_point_keeps_seconds_across_edits(self) -> None:
        response = self.client.post(
            "/curvePoint/validate",
            data={"curve_id": "3", "as_of_date": "2024-01-01T10:00:30", "term": "1", "value": "2"},
        )
        self.assertEqual(response.status_code, 303)
        with self.Session() as db:
            point = db.query(CurvePoint).one()
            point_id = point.id
            self.assertEqual(point.as_of_date, datetime(2024, 1, 1, 10, 0, 30))
            self.assertEqual(point.creation_name, "bob")
        form = self.client.get(f"/curvePoint/update/{point_id}")
        self.assertIn('value="2024-01-01T10:00:30"', form.text)
        self.assertIn('step="1"', form.text)

    def test_rule_json_is_stored_in_json_column(self) -> None:
        response = self.client.post(
            "/ruleName/validate",
            data={"name": "R1", "json_str": '{"a": 1}', "template": "t", "sql_str": "s", "sql_part": "p"},
        )
        self.assertEqual(response.status_code, 303)
        with self.Session() as db:
            stored = db.execute(text("SELECT json FROM rule_name")).scalar_one()
        self.assertEqual(stored, '{"a": 1}')

    def test_oversized_integer_is_a_field_error(self) -> None:
        response = self.client.post(
            "/rating/validate",
            data={
                "moodys_rating": "Aaa",
                "sand_p_rating": "AAA",
                "fitch_rating": "AAA",
                "order_number": "99999999999999999999",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["view"], "rating/add")
        self.assertIn("order_number", response.context["errors"])
        with self.Session() as db:
            self.assertEqual(db.query(Rating).count(), 0)


class TestAutoLogin(WebTestCase):
    """Guest access when login is disabled."""

    auth_enabled = False

    def test_guest_reaches_entity_pages_without_login(self) -> None:
        response = self.client.get("/trade/list")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["identity"].username, settings.GUEST_USERNAME)

    def test_guest_is_not_admin(self) -> None:
        self.assertEqual(self.client.get("/user/list").status_code, 403)

    def test_guest_can_create_records(self) -> None:
        self.client.post("/rating/validate", data={
            "moodys_rating": "Aaa",
            "sand_p_rating": "AAA",
            "fitch_rating": "AAA",
            "order_number": "1",
        })
        page = self.client.get("/rating/list")
        self.assertEqual(len(page.context["ratings"]), 1)

    def test_health_reports_auto_mode(self) -> None:
        body = self.client.get("/health/").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["auth_mode"], "auto")
        self.assertEqual(body["database"], "connected")
