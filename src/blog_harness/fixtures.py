"""
Fixture reset: purge everything, then provision the scenario's user.

Run before every scenario. Both steps are idempotent, so calling
prepare() twice in a row leaves the same single-user state.
"""
import logging

from .errors import Conflict
from .records import UserCredentials, UserRecord
from .stores.base import BlogStore

logger = logging.getLogger(__name__)


class FixtureReset:
    """Scenario isolation over an explicit store handle."""

    def __init__(self, store: BlogStore):
        self.store = store

    def reset_all(self) -> None:
        """Delete every blog and every user. Returns once the purge is committed."""
        self.store.reset_all()

    def provision(self, credentials: UserCredentials) -> UserRecord:
        """
        Create one user.

        Provisioning a user that already exists with the same password is a
        no-op; a different password for an existing username is a Conflict.
        """
        try:
            return self.store.add_user(credentials)
        except Conflict:
            if not self.store.verify_credentials(credentials.username, credentials.password):
                raise
            logger.debug(f"User {credentials.username} already provisioned")
            return UserRecord(username=credentials.username)

    def prepare(self, credentials: UserCredentials) -> UserRecord:
        """reset_all() followed by provision(): the per-scenario barrier."""
        self.reset_all()
        user = self.provision(credentials)
        logger.info(f"Fixture ready: single user {user.username}")
        return user
