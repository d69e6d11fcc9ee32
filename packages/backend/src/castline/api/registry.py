"""Operation registry.

Resolvers register themselves by name with the access they need:

    @registry.operation("createPodcast", input=CreatePodcastInput,
                        output=CreatedOutput, requires=Capability.CREATE_PODCAST)
    async def create_podcast(body, ctx): ...

Operations are private unless declared ``public=True``. ``requires`` adds
a capability check on top of authentication (checked by the auth guard,
before the resolver runs).
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from castline.auth.access import Capability
from castline.auth.guard import AuthContext
from castline.schemas.common import CoreOutput
from castline.services.podcast_service import PodcastService
from castline.services.user_service import UserService
from castline.services.validator import EntityValidator


class ResolverContext:
    """What a resolver gets besides its input: the session and the caller."""

    def __init__(self, db: AsyncSession, auth: AuthContext):
        self.db = db
        self.auth = auth

    @property
    def user(self):
        return self.auth.user

    @cached_property
    def users(self) -> UserService:
        return UserService(self.db)

    @cached_property
    def podcasts(self) -> PodcastService:
        return PodcastService(self.db)

    @cached_property
    def validator(self) -> EntityValidator:
        return EntityValidator(self.podcasts)


Resolver = Callable[[Optional[BaseModel], ResolverContext], Awaitable[CoreOutput]]


@dataclass
class Operation:
    name: str
    resolver: Resolver
    input_model: Optional[type[BaseModel]] = None
    output_model: type[CoreOutput] = CoreOutput
    public: bool = False
    requires: Optional[Capability] = None


class OperationRegistry:
    def __init__(self):
        self._operations: dict[str, Operation] = {}

    def operation(
        self,
        name: str,
        *,
        input: Optional[type[BaseModel]] = None,
        output: type[CoreOutput] = CoreOutput,
        public: bool = False,
        requires: Optional[Capability] = None,
    ):
        def decorator(fn: Resolver) -> Resolver:
            if name in self._operations:
                raise ValueError(f"Operation {name} registered twice")
            self._operations[name] = Operation(
                name=name,
                resolver=fn,
                input_model=input,
                output_model=output,
                public=public,
                requires=requires,
            )
            return fn

        return decorator

    def get(self, name: str) -> Optional[Operation]:
        return self._operations.get(name)

    def names(self) -> list[str]:
        return sorted(self._operations)


registry = OperationRegistry()
