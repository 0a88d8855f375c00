"""
Tests for the session state machine.
"""
import pytest

from blog_harness.errors import InvalidCredentials, SessionStateError, TransportError
from blog_harness.session import ANONYMOUS, Session, SessionManager, SessionState


class TestSessionValue:
    """Session snapshots are immutable values."""

    def test_default_session_is_anonymous(self):
        session = Session()
        assert session.state is SessionState.ANONYMOUS
        assert not session.is_authenticated
        assert str(session) == "Anonymous"

    def test_authenticated_as_returns_new_snapshot(self):
        session = ANONYMOUS.authenticated_as('alice')

        assert session.is_authenticated
        assert session.identity == 'alice'
        assert str(session) == "Authenticated(alice)"
        assert ANONYMOUS.identity is None

    def test_authenticated_as_twice_raises(self):
        session = ANONYMOUS.authenticated_as('alice')
        with pytest.raises(SessionStateError):
            session.authenticated_as('bob')

    def test_logged_out_is_anonymous(self):
        assert ANONYMOUS.authenticated_as('alice').logged_out() == ANONYMOUS

    def test_session_is_frozen(self):
        session = Session(identity='alice')
        with pytest.raises(AttributeError):
            session.identity = 'bob'


class TestLogin:
    """login(): Anonymous → Authenticated iff credentials match exactly."""

    def test_valid_credentials_authenticate(self, harness, any_store):
        manager = SessionManager(any_store, actor='alice')

        session = manager.login('alice', 'pw1')

        assert session == Session(identity='alice')
        assert manager.identity == 'alice'

    def test_wrong_password_stays_anonymous(self, harness, any_store):
        manager = SessionManager(any_store)

        with pytest.raises(InvalidCredentials):
            manager.login('alice', 'wrong')

        assert manager.session == ANONYMOUS

    def test_unknown_user_stays_anonymous(self, harness, any_store):
        manager = SessionManager(any_store)

        with pytest.raises(InvalidCredentials):
            manager.login('mallory', 'pw1')

        assert manager.session.state is SessionState.ANONYMOUS

    def test_password_comparison_is_exact(self, harness, any_store):
        manager = SessionManager(any_store)

        for attempt in ('PW1', 'pw1 ', ' pw1', 'pw'):
            with pytest.raises(InvalidCredentials):
                manager.login('alice', attempt)

        assert manager.session == ANONYMOUS

    def test_login_while_authenticated_is_rejected(self, harness, any_store, bob):
        """Second login without logout raises and keeps the first identity."""
        harness.provision(bob)
        manager = SessionManager(any_store)
        manager.login('alice', 'pw1')

        with pytest.raises(SessionStateError):
            manager.login('bob', 'pw2')

        assert manager.identity == 'alice'

    def test_harness_login_returns_bool(self, harness):
        assert harness.login('alice', 'wrong') is False
        assert not harness.session.is_authenticated

        assert harness.login('alice', 'pw1') is True
        assert harness.session.identity == 'alice'


class TestLogout:
    """logout() always succeeds and never touches stored data."""

    def test_logout_from_authenticated(self, harness, any_store):
        manager = SessionManager(any_store)
        manager.login('alice', 'pw1')

        assert manager.logout() == ANONYMOUS
        assert any_store.get_user('alice') is not None

    def test_logout_when_anonymous_is_noop(self, any_store):
        manager = SessionManager(any_store)

        assert manager.logout() == ANONYMOUS
        assert manager.logout() == ANONYMOUS

    def test_login_after_logout_switches_identity(self, harness, any_store, bob):
        harness.provision(bob)
        manager = SessionManager(any_store)

        manager.login('alice', 'pw1')
        manager.logout()
        manager.login('bob', 'pw2')

        assert manager.identity == 'bob'

    def test_identity_survives_reset(self, store, alice):
        """The identity is not re-validated after login."""
        store.add_user(alice)
        manager = SessionManager(store)
        manager.login('alice', 'pw1')

        store.reset_all()

        assert manager.identity == 'alice'

    def test_logout_tolerates_failed_revocation(self, store, alice, monkeypatch):
        """A store that cannot revoke the token still ends the session."""
        store.add_user(alice)
        manager = SessionManager(store)
        manager.login('alice', 'pw1')

        def unreachable(token):
            raise TransportError("API down")

        monkeypatch.setattr(store, 'end_session', unreachable)

        assert manager.logout() == ANONYMOUS


class TestSessionsAreIndependent:
    """Each actor owns its login; nothing is shared through the store."""

    def test_login_carries_store_token(self, harness, any_store):
        manager = SessionManager(any_store)

        session = manager.login('alice', 'pw1')

        assert session.token
        assert session.token not in repr(session)

    def test_provision_keeps_active_login(self, harness, alice):
        """Re-provisioning the logged-in user leaves the login usable."""
        harness.login('alice', 'pw1')

        harness.provision(alice)

        blog = harness.create_blog('Still here', 'Author', 'http://example.com')
        assert blog.creator == 'alice'

    def test_logout_of_one_actor_keeps_the_other(self, harness):
        """Two actors logged in as the same user: one logs out, the other can still write."""
        second = harness.for_actor('alice-second-tab')
        assert harness.login('alice', 'pw1')
        assert second.login('alice', 'pw1')

        harness.logout()

        blog = second.create_blog('From the other tab', 'Author', 'http://example.com')
        assert blog.creator == 'alice'
        second.delete_blog(blog.id)
        assert second.list_blogs() == []
