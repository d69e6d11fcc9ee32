"""User resolvers — accounts, login, profiles.

- createAccount (public)
- login (public) → token
- me → the caller
- seeProfile → any user by id
- editProfile → change the caller's email/password
"""

from castline.api.registry import ResolverContext, registry
from castline.schemas.common import CoreOutput
from castline.schemas.user import (
    CreateAccountInput,
    EditProfileInput,
    LoginInput,
    LoginOutput,
    SeeProfileInput,
    UserProfileOutput,
    UserRead,
)


@registry.operation("createAccount", input=CreateAccountInput, public=True)
async def create_account(body: CreateAccountInput, ctx: ResolverContext):
    await ctx.users.create_account(body.email, body.password, body.role)
    return CoreOutput(ok=True)


@registry.operation("login", input=LoginInput, output=LoginOutput, public=True)
async def login(body: LoginInput, ctx: ResolverContext):
    token = await ctx.users.login(body.email, body.password)
    return LoginOutput(ok=True, token=token)


@registry.operation("me", output=UserProfileOutput)
async def me(body, ctx: ResolverContext):
    return UserProfileOutput(ok=True, user=UserRead.model_validate(ctx.user))


@registry.operation("seeProfile", input=SeeProfileInput, output=UserProfileOutput)
async def see_profile(body: SeeProfileInput, ctx: ResolverContext):
    user = await ctx.users.get_profile(body.user_id)
    return UserProfileOutput(ok=True, user=UserRead.model_validate(user))


@registry.operation("editProfile", input=EditProfileInput)
async def edit_profile(body: EditProfileInput, ctx: ResolverContext):
    await ctx.users.edit_profile(ctx.user, email=body.email, password=body.password)
    return CoreOutput(ok=True)
