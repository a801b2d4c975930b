"""
Access Gate middleware.

Reads the session token from the request, asks AccessGateUseCase for a
disposition and turns anything but "allow" into a redirect. On forced
sign-out the session cookie is cleared as well.
"""

import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from src.adapter.services.identity_provider import LocalIdentityProvider
from src.api.utils.cookies import clear_session_cookie, read_session_token
from src.app.use_cases.gate import AccessGateUseCase
from src.depends import open_unit_of_work
from src.domain.entities import Disposition
from src.domain.policies import GatePaths, decide_anonymous, is_anonymous_entry, is_protected

logger = logging.getLogger(__name__)


class AccessGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, config):
        super().__init__(app)
        self.paths = GatePaths.from_config(config)
        self.fail_mode = config.GATE_FAIL_MODE
        self.cookie_name = config.SESSION_COOKIE_NAME

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Paths outside the gate's rules are allowed whoever calls
        if not (is_protected(path, self.paths) or is_anonymous_entry(path, self.paths)):
            return await call_next(request)

        token = read_session_token(request, self.cookie_name)
        disposition = await self._evaluate(request, path, token)

        if disposition.allowed:
            return await call_next(request)

        response = RedirectResponse(url=disposition.location, status_code=307)
        if disposition.sign_out:
            clear_session_cookie(response, self.cookie_name)
        return response

    async def _evaluate(self, request: Request, path: str, token) -> Disposition:
        try:
            async with open_unit_of_work(request.app) as uow:
                gate = AccessGateUseCase(
                    uow, LocalIdentityProvider(uow), self.paths, self.fail_mode
                )
                return await gate.evaluate(path, token)
        except Exception:
            logger.exception(f"Access gate could not evaluate {path}")
            return decide_anonymous(path, self.paths)
