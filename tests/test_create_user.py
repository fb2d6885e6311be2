"""Tests for the create_user bootstrap command."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from poseidon.core.security import verify_password
from poseidon.models import Base, User
from poseidon.scripts import create_user


@patch("poseidon.core.security.BCRYPT_ROUNDS", 4)
class TestCreateUserCommand(unittest.TestCase):
    """The create-user command line entry point."""

    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.Session = sessionmaker(bind=engine, autoflush=False)
        session_patch = patch.object(create_user, "SessionLocal", self.Session)
        session_patch.start()
        self.addCleanup(session_patch.stop)
        logging_patch = patch.object(create_user, "setup_logging")
        logging_patch.start()
        self.addCleanup(logging_patch.stop)

    def test_creates_admin(self) -> None:
        code = create_user.main(["admin", "Adm1n!pass", "Administrator", "ADMIN"])
        self.assertEqual(code, 0)
        with self.Session() as db:
            user = db.query(User).filter(User.username == "admin").one()
            self.assertEqual(user.role, "ADMIN")
            self.assertEqual(user.fullname, "Administrator")
            self.assertTrue(verify_password("Adm1n!pass", user.password_hash))

    def test_role_defaults_to_user(self) -> None:
        self.assertEqual(create_user.main(["bob", "B0b!passw", "Bob"]), 0)
        with self.Session() as db:
            self.assertEqual(db.query(User).one().role, "USER")

    def test_refuses_duplicate(self) -> None:
        self.assertEqual(create_user.main(["bob", "B0b!passw", "Bob"]), 0)
        self.assertEqual(create_user.main(["bob", "B0b!passw", "Bob again"]), 1)
        with self.Session() as db:
            self.assertEqual(db.query(User).count(), 1)

    def test_refuses_weak_password(self) -> None:
        self.assertEqual(create_user.main(["bob", "password", "Bob"]), 1)
        with self.Session() as db:
            self.assertEqual(db.query(User).count(), 0)
