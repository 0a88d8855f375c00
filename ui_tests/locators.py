"""Locators for the blog frontend.

Semantic selectors only (roles, names, visible text); the frontend's CSS
classes are not part of the contract.
"""

LOGIN_FORM = 'form[role="form"]'
USERNAME_INPUT = 'input[name="Username"]'
PASSWORD_INPUT = 'input[name="Password"]'
SUBMIT_BUTTON = 'button[type="submit"]'

# Failed login renders an alert box with this inline background
ERROR_NOTIFICATION = 'div[style*="background-color: #f8d7da"]'

NEW_BLOG_BUTTON = 'button:has-text("new blog")'
TITLE_INPUT = 'input[name="title"]'
AUTHOR_INPUT = 'input[name="author"]'
URL_INPUT = 'input[name="url"]'

LOGOUT_BUTTON = 'button:has-text("logout")'
LIKE_BUTTON = 'button:has-text("like")'
VIEW_BUTTON = 'button:has-text("view")'
REMOVE_BUTTON = 'button:has-text("remove")'


def logged_in_as(username: str) -> str:
    """Paragraph naming the logged-in user."""
    return f'p:has-text("{username}")'


def blog_entry(title: str) -> str:
    """Container of one blog in the list."""
    return f'div:has-text("{title}")'


def blog_likes(title: str) -> str:
    """Paragraph of the blog entry that holds 'Likes: N'."""
    return f'{blog_entry(title)} >> p:has-text("Likes:")'
