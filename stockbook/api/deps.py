from fastapi import Depends, Request

from stockbook.core.config import Settings
from stockbook.core.errors import Forbidden
from stockbook.core.policy import POLICY_DENIED_MESSAGES, Identity, Policy, is_allowed
from stockbook.services.auth import validate_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(request: Request, config: Settings = Depends(get_settings)) -> Identity:
    identity = validate_token(request.headers.get("authorization"), config)
    request.state.identity = identity
    return identity


def require_policy(policy: Policy):
    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not is_allowed(identity, policy):
            raise Forbidden(POLICY_DENIED_MESSAGES[policy])
        return identity

    return checker


require_authenticated = require_policy(Policy.AUTHENTICATED)
require_admin = require_policy(Policy.ADMIN_OR_ABOVE)
require_super_admin = require_policy(Policy.SUPER_ADMIN_ONLY)
