"""User operations through the operations endpoint.

Tests cover:
1. Account creation + duplicate prevention
2. Login → token, and the two distinct login failures
3. Private operations (me, seeProfile, editProfile) with good, bad,
   stale and missing tokens

Pattern: test_<operation>_<scenario>
"""

import pytest

from castline.auth import tokens

PASSWORD = "12345"


def result(body: dict, operation: str) -> dict:
    return body["data"][operation]


# ═══════════════════════════════════════════════════════════
# createAccount
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_account(call):
    body = await call(
        "createAccount",
        {"email": "immda@naver.com", "password": PASSWORD, "role": "Host"},
    )
    assert body["data"]["createAccount"] == {"ok": True, "error": None}


@pytest.mark.asyncio
async def test_create_account_duplicate_email(call):
    account = {"email": "immda@naver.com", "password": PASSWORD, "role": "Host"}
    await call("createAccount", account)

    body = await call("createAccount", account)
    assert body["data"]["createAccount"] == {
        "ok": False,
        "error": "There is a user with that email already",
    }


@pytest.mark.asyncio
async def test_create_account_duplicate_ignores_case(call):
    await call(
        "createAccount",
        {"email": "Immda@Naver.com", "password": PASSWORD, "role": "Listener"},
    )
    body = await call(
        "createAccount",
        {"email": "  immda@naver.COM ", "password": PASSWORD, "role": "Host"},
    )
    assert result(body, "createAccount")["error"] == "There is a user with that email already"


@pytest.mark.asyncio
async def test_create_account_rejects_unknown_role(call):
    body = await call(
        "createAccount",
        {"email": "a@b.com", "password": PASSWORD, "role": "Admin"},
    )
    out = result(body, "createAccount")
    assert out["ok"] is False
    assert out["error"].startswith("role")


@pytest.mark.asyncio
async def test_create_account_rejects_bad_email(call):
    body = await call(
        "createAccount",
        {"email": "not-an-email", "password": PASSWORD, "role": "Host"},
    )
    out = result(body, "createAccount")
    assert out["ok"] is False
    assert "Invalid email address" in out["error"]


# ═══════════════════════════════════════════════════════════
# login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(call):
    await call("createAccount", {"email": "a@b.com", "password": PASSWORD, "role": "Host"})

    body = await call("login", {"email": "a@b.com", "password": PASSWORD})
    out = result(body, "login")
    assert out["ok"] is True
    assert out["error"] is None
    assert isinstance(out["token"], str)


@pytest.mark.asyncio
async def test_login_normalizes_email(call):
    await call("createAccount", {"email": "a@b.com", "password": PASSWORD, "role": "Host"})

    body = await call("login", {"email": "A@B.COM", "password": PASSWORD})
    assert result(body, "login")["ok"] is True


@pytest.mark.asyncio
async def test_login_wrong_password(call):
    await call("createAccount", {"email": "a@b.com", "password": PASSWORD, "role": "Host"})

    body = await call("login", {"email": "a@b.com", "password": "fail"})
    assert result(body, "login") == {"ok": False, "error": "Wrong password", "token": None}


@pytest.mark.asyncio
async def test_login_unknown_email(call):
    body = await call("login", {"email": "nobody@b.com", "password": PASSWORD})
    assert result(body, "login") == {"ok": False, "error": "User not found", "token": None}


# ═══════════════════════════════════════════════════════════
# me / seeProfile
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_me(call, host_token):
    body = await call("me", token=host_token)
    user = result(body, "me")["user"]
    assert user["email"] == "host@castline.fm"
    assert user["role"] == "Host"
    assert "passwordHash" not in user


@pytest.mark.asyncio
async def test_me_without_token_is_forbidden(call):
    body = await call("me")
    assert body["data"] is None
    assert body["errors"] == [{"message": "Forbidden resource"}]


@pytest.mark.asyncio
async def test_me_with_invalid_token_is_forbidden(call):
    body = await call("me", token="invalid-token")
    assert body["errors"][0]["message"] == "Forbidden resource"


@pytest.mark.asyncio
async def test_me_with_stale_token_is_forbidden(call):
    """A correctly signed token for a user that doesn't exist."""
    body = await call("me", token=tokens.issue(999))
    assert body["errors"][0]["message"] == "Forbidden resource"


@pytest.mark.asyncio
async def test_see_profile(call, host_token):
    me = result(await call("me", token=host_token), "me")["user"]

    body = await call("seeProfile", {"userId": me["id"]}, token=host_token)
    assert result(body, "seeProfile") == {
        "ok": True,
        "error": None,
        "user": {"id": me["id"], "email": "host@castline.fm", "role": "Host"},
    }


@pytest.mark.asyncio
async def test_see_profile_not_found(call, host_token):
    body = await call("seeProfile", {"userId": 100}, token=host_token)
    assert result(body, "seeProfile") == {"ok": False, "error": "User Not Found", "user": None}


@pytest.mark.asyncio
async def test_see_profile_huge_id_not_found(call, host_token):
    body = await call("seeProfile", {"userId": 2**70}, token=host_token)
    assert result(body, "seeProfile") == {"ok": False, "error": "User Not Found", "user": None}


@pytest.mark.asyncio
async def test_see_profile_invalid_token(call):
    body = await call("seeProfile", {"userId": 1}, token="invalid-token")
    assert body["data"] is None
    assert body["errors"][0]["message"] == "Forbidden resource"


# ═══════════════════════════════════════════════════════════
# editProfile
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_edit_profile_email(call, host_token):
    body = await call("editProfile", {"email": "new@castline.fm"}, token=host_token)
    assert result(body, "editProfile") == {"ok": True, "error": None}

    me = result(await call("me", token=host_token), "me")["user"]
    assert me["email"] == "new@castline.fm"


@pytest.mark.asyncio
async def test_edit_profile_password(call, host_token):
    await call("editProfile", {"password": "s3cret"}, token=host_token)

    old = await call("login", {"email": "host@castline.fm", "password": PASSWORD})
    assert result(old, "login")["error"] == "Wrong password"
    new = await call("login", {"email": "host@castline.fm", "password": "s3cret"})
    assert result(new, "login")["ok"] is True


@pytest.mark.asyncio
async def test_edit_profile_email_taken(call, host_token, listener_token):
    body = await call("editProfile", {"email": "listener@castline.fm"}, token=host_token)
    assert result(body, "editProfile") == {
        "ok": False,
        "error": "There is a user with that email already",
    }


@pytest.mark.asyncio
async def test_edit_profile_requires_token(call):
    body = await call("editProfile", {"email": "x@y.com"})
    assert body["errors"][0]["message"] == "Forbidden resource"
