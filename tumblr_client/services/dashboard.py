"""The user's dashboard, paged by offset, since_id or before_id."""

import logging
from typing import Optional

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError, NoNextPageError
from tumblr_client.core.params import Params, ParamsLike, as_params, param_int, set_param_int
from tumblr_client.core.response import Response, response_payload
from tumblr_client.core.types import MiniPost, read_list
from tumblr_client.services.pagination import PaginationMode, check_mode, detect_mode
from tumblr_client.services.posts import LazyPostList, Post

logger = logging.getLogger("tumblr_client")

DASHBOARD_MODES = (PaginationMode.OFFSET, PaginationMode.SINCE_ID, PaginationMode.BEFORE_ID)


class Dashboard(LazyPostList):
    """One page of the dashboard.

    The page remembers the cursor mode it was requested with and can only
    be advanced by the matching ``next_by_*`` method. A page requested
    without any cursor cannot be advanced; request it with ``offset=0``
    (or a ``since_id``/``before_id``) to page through the dashboard.
    """

    def __init__(
        self,
        minis: list[MiniPost],
        response: Response,
        transport: Transport,
        params: Params,
        mask_errors: bool = True,
    ):
        super().__init__(minis, response, transport, mask_errors)
        self._params = params
        self.mode: Optional[PaginationMode] = detect_mode(params, DASHBOARD_MODES)

    @property
    def params(self) -> Params:
        """Copy of the parameters this page was requested with."""
        return self._params.copy()

    @property
    def posts(self) -> list[Post]:
        return self.all()

    def _last_id(self) -> int:
        if len(self.minis) < 1:
            raise NoNextPageError()
        return self.minis[-1].id

    def next_by_offset(self) -> "Dashboard":
        check_mode(self.mode, PaginationMode.OFFSET)
        if len(self.minis) < 1:
            raise NoNextPageError()
        params = self._params.copy()
        offset = param_int(params, "offset") + len(self.minis)
        params.set("offset", offset)
        return get_dashboard(self._transport, params, mask_errors=self._mask_errors)

    def next_by_since_id(self) -> "Dashboard":
        check_mode(self.mode, PaginationMode.SINCE_ID)
        params = set_param_int(self._last_id(), self._params.copy(), "since_id")
        return get_dashboard(self._transport, params, mask_errors=self._mask_errors)

    def next_by_before_id(self) -> "Dashboard":
        check_mode(self.mode, PaginationMode.BEFORE_ID)
        params = set_param_int(self._last_id(), self._params.copy(), "before_id")
        return get_dashboard(self._transport, params, mask_errors=self._mask_errors)


def get_dashboard(
    transport: Transport,
    params: ParamsLike = None,
    mask_errors: bool = True,
) -> Dashboard:
    """Retrieve a page of the user's dashboard.

    Raises:
        MixedPaginationParamsError: more than one of offset, since_id and
            before_id was given (checked before any request)
        TransportError: request failed
        DecodeError: response body could not be decoded
    """
    values = as_params(params)
    detect_mode(values, DASHBOARD_MODES)

    response = transport.get_with_params("/user/dashboard", values)
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("Dashboard payload is not a JSON object")
    minis = [MiniPost.from_dict(p) for p in read_list(payload, "posts")]

    dashboard = Dashboard(minis, response, transport, values, mask_errors=mask_errors)
    # decode errors surface from this call
    dashboard.all()
    logger.debug(f"Fetched dashboard page with {len(minis)} posts (mode={dashboard.mode})")
    return dashboard
