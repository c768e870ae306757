from typing import Any, Dict, Optional
from urllib.parse import quote

from ..swagger.schema import Endpoint, HttpMethod, Parameter, ParameterLocation
from .http_client import HttpRequestSpec

BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class RequestBuilder:
    """Builds the outbound request for an API data source.

    Substitution is textual. A required parameter with no value is sent as
    an empty string instead of being rejected; an optional one is left out.
    """

    DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}

    def build(
        self,
        base_url: Optional[str],
        endpoint: Endpoint,
        parameters: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None
    ) -> HttpRequestSpec:
        parameters = parameters or {}

        path = endpoint.path
        for param in endpoint.parameters_in(ParameterLocation.PATH):
            value = self._value_for(param, parameters)
            path = path.replace(f"{{{param.name}}}", quote(value if value is not None else "", safe=""))

        query: Dict[str, Any] = {}
        for param in endpoint.parameters_in(ParameterLocation.QUERY):
            value = self._value_for(param, parameters)
            if value is not None:
                query[param.name] = value

        request_headers = {**self.DEFAULT_HEADERS, **(headers or {})}
        for param in endpoint.parameters_in(ParameterLocation.HEADER):
            value = self._value_for(param, parameters)
            if value is not None:
                request_headers[param.name] = value

        return HttpRequestSpec(
            url=f"{(base_url or '').rstrip('/')}{path}",
            method=endpoint.method.value.upper(),
            query=query,
            headers=request_headers,
            body=body if endpoint.method in BODY_METHODS else None,
        )

    def _value_for(self, param: Parameter, parameters: Dict[str, Any]) -> Optional[str]:
        value = parameters.get(param.name)
        if value is None:
            return "" if param.required else None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
