"""User management: the CRUD workflow plus username uniqueness and password hashing."""

import logging

from poseidon.core.errors import DuplicateUsername
from poseidon.core.security import hash_password
from poseidon.models import User
from poseidon.repositories.users import UserRepository
from poseidon.schemas.user import UserRecord
from poseidon.services.crud import CrudWorkflow, EntityKind
from poseidon.services.validation import FormField, Matches, MaxLength, NotBlank, parse_stripped

logger = logging.getLogger(__name__)

# At least 8 characters, one digit and one character that is neither letter nor digit.
PASSWORD_PATTERN = r"(?=.*[0-9])(?=.*[^a-zA-Z0-9]).{8,}"
PASSWORD_RULE_MESSAGE = (
    "Password must be at least 8 characters long and contain at least one number "
    "and one special character"
)

USERNAME_FIELD = FormField(
    "username",
    "Username",
    parse=parse_stripped,
    rules=(
        NotBlank("Username is mandatory"),
        MaxLength(125, "Username must be less than 125 characters"),
    ),
)
FULLNAME_FIELD = FormField(
    "fullname",
    "Full Name",
    rules=(
        NotBlank("FullName is mandatory"),
        MaxLength(125, "FullName must be less than 125 characters"),
    ),
)
ROLE_FIELD = FormField(
    "role",
    "Role",
    rules=(
        NotBlank("Role is mandatory"),
        MaxLength(125, "Role must be less than 125 characters"),
    ),
)

USER = EntityKind(
    name="user",
    label="User",
    model=User,
    record=UserRecord,
    fields=(
        USERNAME_FIELD,
        FormField(
            "password",
            "Password",
            input_type="password",
            rules=(
                NotBlank("Password is mandatory"),
                Matches(PASSWORD_PATTERN, PASSWORD_RULE_MESSAGE),
            ),
        ),
        FULLNAME_FIELD,
        ROLE_FIELD,
    ),
    columns=(
        ("id", "Id"),
        ("fullname", "Full Name"),
        ("username", "User Name"),
        ("role", "Role"),
    ),
)

# On update a blank password means "keep the current one".
UPDATE_FIELDS = (
    USERNAME_FIELD,
    FormField(
        "password",
        "Password",
        input_type="password",
        rules=(Matches(PASSWORD_PATTERN, PASSWORD_RULE_MESSAGE),),
    ),
    FULLNAME_FIELD,
    ROLE_FIELD,
)


class UserWorkflow(CrudWorkflow[User, UserRecord]):
    """CRUD workflow for users. The stored hash never leaves this class."""

    repository: UserRepository

    def __init__(self, repository: UserRepository) -> None:
        super().__init__(USER, repository)

    def fields_for(self, creating: bool) -> tuple[FormField, ...]:
        return self.kind.fields if creating else UPDATE_FIELDS

    def new_entity(self, record: UserRecord) -> User:
        if self.repository.find_by_username(record.username) is not None:
            raise DuplicateUsername(record.username)
        return User(
            username=record.username,
            fullname=record.fullname,
            role=record.role,
            password_hash=hash_password(record.password),
        )

    def apply_changes(self, record: UserRecord, entity: User) -> None:
        if record.username != entity.username:
            other = self.repository.find_by_username(record.username)
            if other is not None and other.id != entity.id:
                raise DuplicateUsername(record.username)
        entity.username = record.username
        entity.fullname = record.fullname
        entity.role = record.role
        if record.password and record.password.strip():
            entity.password_hash = hash_password(record.password)
            logger.info("Password replaced for user id=%s", entity.id)
