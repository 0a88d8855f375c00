"""
Tests for the delete authorization guard.
"""
import pytest

from blog_harness.authorization import can_delete, ensure_can_delete
from blog_harness.errors import Forbidden
from blog_harness.records import BlogRecord
from blog_harness.session import ANONYMOUS, Session


@pytest.fixture
def alices_blog():
    return BlogRecord(
        id=1,
        title='Test Blog',
        author='Test Author',
        url='http://example.com',
        likes=0,
        creator='alice',
    )


class TestCanDelete:
    """can_delete() is true iff the session identity is the creator."""

    def test_creator_may_delete(self, alices_blog):
        assert can_delete(Session(identity='alice'), alices_blog) is True

    def test_other_identity_may_not_delete(self, alices_blog):
        assert can_delete(Session(identity='bob'), alices_blog) is False

    def test_anonymous_may_not_delete(self, alices_blog):
        assert can_delete(ANONYMOUS, alices_blog) is False

    @pytest.mark.parametrize('identity', ['Alice', 'alice ', 'ali', 'alice2'])
    def test_identity_match_is_exact(self, alices_blog, identity):
        assert can_delete(Session(identity=identity), alices_blog) is False

    def test_author_field_is_not_an_identity(self, alices_blog):
        """The display author never grants delete rights."""
        assert can_delete(Session(identity='Test Author'), alices_blog) is False


class TestEnsureCanDelete:

    def test_creator_passes(self, alices_blog):
        ensure_can_delete(Session(identity='alice'), alices_blog)

    def test_other_identity_raises_forbidden(self, alices_blog):
        with pytest.raises(Forbidden) as exc_info:
            ensure_can_delete(Session(identity='bob'), alices_blog)

        assert exc_info.value.expected is True
        assert exc_info.value.status_code == 403

    def test_anonymous_raises_forbidden(self, alices_blog):
        with pytest.raises(Forbidden):
            ensure_can_delete(ANONYMOUS, alices_blog)
