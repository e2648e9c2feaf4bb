"""Precondition steps for DMC service operations.

An operation declares the checks that must hold before its remote call:

    @requires(valid_email("email"), user_exists_by_email("email"))
    def update_profile_by_email(self, email, attributes):
        ...

Checks run in order and stop at the first failure. A failed check makes the
operation return False without calling the remote operation.
"""
from __future__ import annotations
import inspect
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Mapping

from dmc.core.models import coerce_enum
from dmc.core.validators import is_valid_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Precondition:
    """Named check over a service and the operation's bound arguments."""
    name: str
    check: Callable[[Any, Mapping[str, Any]], bool]

    def __call__(self, service: Any, arguments: Mapping[str, Any]) -> bool:
        return bool(self.check(service, arguments))


def requires(*preconditions: Precondition):
    """Decorator running preconditions before a service method.

    Args:
        *preconditions: Checks evaluated in declaration order

    Returns:
        Decorated method returning False when any check fails
    """
    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            for precondition in preconditions:
                if not precondition(self, bound.arguments):
                    logger.debug("[dmc] %s skipped: precondition '%s' failed", func.__name__, precondition.name)
                    return False
            return func(self, *args, **kwargs)

        wrapper.preconditions = preconditions
        return wrapper

    return decorator


def valid_email(arg: str = "email") -> Precondition:
    return Precondition(f"valid_email({arg})", lambda service, args: is_valid_email(args[arg]))


def one_of(arg: str, enum_cls) -> Precondition:
    """Argument must name a member of enum_cls (case-insensitive)."""
    return Precondition(
        f"{arg} in {enum_cls.__name__}",
        lambda service, args: coerce_enum(enum_cls, args[arg]) is not None,
    )


def _users(service):
    from .users import UserService
    return service if isinstance(service, UserService) else UserService(service.client)


def user_exists(arg: str = "user_id") -> Precondition:
    def check(service, args):
        return _users(service).get_user(args[arg]) is not False

    return Precondition(f"user_exists({arg})", check)


def user_exists_by_email(arg: str = "email") -> Precondition:
    def check(service, args):
        return _users(service).get_user_by_email(args[arg]) is not False

    return Precondition(f"user_exists_by_email({arg})", check)


def user_absent_by_email(arg: str = "email") -> Precondition:
    def check(service, args):
        return _users(service).get_user_by_email(args[arg]) is False

    return Precondition(f"user_absent_by_email({arg})", check)


def message_valid(arg: str = "message_id") -> Precondition:
    def check(service, args):
        from .messages import MessageService
        messages = service if isinstance(service, MessageService) else MessageService(service.client)
        return messages.validate_message(args[arg])

    return Precondition(f"message_valid({arg})", check)
