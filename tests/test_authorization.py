import pytest
from fastapi import HTTPException

from lms_backend.core.deps import AuthorizationService
from lms_backend.core.enum import UserRole
from lms_backend.core.policy import RolePolicy


@pytest.fixture
def authorization(security, revocation):
    return AuthorizationService(security=security, revocation=revocation)


async def owner_token(security):
    return await security.create_access_token(
        sub="owner-1", email="owner@x.com", full_name="Olive Owner", role="Owner"
    )


async def test_valid_token_returns_claims(authorization, security):
    token = await owner_token(security)

    context = await authorization.authenticate(token)

    assert context.token == token
    assert context.claims.full_name == "Olive Owner"


@pytest.mark.parametrize("token, detail", [(None, "Token not found"), ("", "Token not found")])
async def test_missing_token(authorization, token, detail):
    with pytest.raises(HTTPException) as exc:
        await authorization.authenticate(token)
    assert exc.value.detail == detail


async def test_garbage_and_revoked_tokens_are_unauthenticated(
    authorization, security, revocation
):
    with pytest.raises(HTTPException) as exc:
        await authorization.authenticate("not.a.jwt")
    assert exc.value.detail == "Unauthenticated"

    token = await owner_token(security)
    revocation.put(token, 60)
    with pytest.raises(HTTPException) as exc:
        await authorization.authenticate(token)
    assert exc.value.status_code == 401


def test_default_policy_requires_owner(owner_claims):
    policy = RolePolicy()
    assert policy.role_for("course.create") == UserRole.OWNER
    assert policy.require(owner_claims, "course.edit") is owner_claims

    with pytest.raises(KeyError):
        policy.role_for("course.publish")
    with pytest.raises(HTTPException):
        policy.require(None, "course.create")


def test_custom_policy_table(owner_claims):
    policy = RolePolicy({"course.create": UserRole.INSTRUCTOR})
    instructor = owner_claims.model_copy(update={"role": UserRole.INSTRUCTOR.value})

    assert policy.require(instructor, "course.create") is instructor
    with pytest.raises(HTTPException):
        policy.require(owner_claims, "course.create")
