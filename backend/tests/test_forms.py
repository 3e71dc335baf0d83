"""
Snippetbox — Form Validation Tests
===================================

What:  Tests for the snippet, signup and login form rules.
"""

from snippetbox.schemas.forms import LoginForm, SignupForm, SnippetForm, validate_form


class TestSnippetForm:
    def test_valid(self):
        form, errors = validate_form(
            SnippetForm, {"title": "O snail", "content": "Climb Mount Fuji", "expires": "7"}
        )
        assert errors == {}
        assert form.title == "O snail"
        assert form.expires_days == 7

    def test_blank_fields(self):
        form, errors = validate_form(SnippetForm, {"title": "   ", "content": "", "expires": "1"})
        assert form is None
        assert errors == {
            "title": "This field cannot be blank",
            "content": "This field cannot be blank",
        }

    def test_missing_fields_are_blank(self):
        form, errors = validate_form(SnippetForm, {})
        assert form is None
        assert set(errors) == {"title", "content"}

    def test_title_too_long(self):
        _, errors = validate_form(
            SnippetForm, {"title": "x" * 101, "content": "c", "expires": "365"}
        )
        assert errors == {"title": "This field cannot be more than 100 characters long"}

    def test_title_at_limit(self):
        form, errors = validate_form(
            SnippetForm, {"title": "x" * 100, "content": "c", "expires": "365"}
        )
        assert errors == {}
        assert len(form.title) == 100

    def test_expires_not_permitted(self):
        for value in ("0", "30", "abc", ""):
            _, errors = validate_form(SnippetForm, {"title": "t", "content": "c", "expires": value})
            assert errors == {"expires": "This field must equal 1, 7 or 365"}


class TestSignupForm:
    def test_valid(self):
        form, errors = validate_form(
            SignupForm, {"name": "Bob", "email": "bob@example.com", "password": "validPa$$word"}
        )
        assert errors == {}
        assert form.email == "bob@example.com"

    def test_invalid_email(self):
        _, errors = validate_form(
            SignupForm, {"name": "Bob", "email": "bob@example.", "password": "validPa$$word"}
        )
        assert errors == {"email": "This field must be a valid email address"}

    def test_short_password(self):
        _, errors = validate_form(
            SignupForm, {"name": "Bob", "email": "bob@example.com", "password": "pa$$"}
        )
        assert errors == {"password": "This field must be at least 8 characters long"}

    def test_all_blank(self):
        _, errors = validate_form(SignupForm, {"name": "", "email": "", "password": ""})
        assert errors == {
            "name": "This field cannot be blank",
            "email": "This field cannot be blank",
            "password": "This field cannot be blank",
        }


class TestLoginForm:
    def test_valid(self):
        form, errors = validate_form(
            LoginForm, {"email": "alice@example.com", "password": "pa$$word"}
        )
        assert errors == {}
        assert form.password == "pa$$word"

    def test_short_password_allowed(self):
        """Length rules apply at signup only."""
        _, errors = validate_form(LoginForm, {"email": "alice@example.com", "password": "x"})
        assert errors == {}

    def test_blank(self):
        _, errors = validate_form(LoginForm, {"email": "", "password": ""})
        assert set(errors) == {"email", "password"}

    def test_unknown_fields_ignored(self):
        form, errors = validate_form(
            LoginForm, {"email": "alice@example.com", "password": "pa$$word", "extra": "1"}
        )
        assert errors == {}
        assert not hasattr(form, "extra")
