"""Parser for Swagger/OpenAPI specifications."""

from typing import Dict, List, Any, Optional, Tuple

from ..logging import BaseLogger
from .resolver import REF_KEY, ReferenceResolver, is_reference
from .schema import (
    BodySchema,
    Endpoint,
    HttpMethod,
    Parameter,
    ParameterLocation,
    ParsedSpecification,
    ResponseSchema,
    SpecificationType,
)


class SwaggerParserError(Exception):
    """Error raised during Swagger parsing."""
    pass


class UnsupportedFormatError(SwaggerParserError):
    """The document is neither Swagger 2.x nor OpenAPI 3.x."""
    pass


DEFAULT_CONTENT_TYPE = "application/json"


class SpecificationParser:
    """Turns a raw Swagger/OpenAPI document into a ParsedSpecification.

    Every schema handed out is reference-resolved. Duplicate method+path
    pairs cannot occur in a well-formed document; if a document repeats
    a path key, the last one wins when it is loaded, and the parser does
    not deduplicate further.
    """

    def __init__(self, logger: Optional[BaseLogger] = None):
        self.logger = logger

    def parse(self, document: Dict[str, Any]) -> ParsedSpecification:
        """
        Parse a Swagger/OpenAPI document.

        Args:
            document: The loaded JSON/YAML document

        Returns:
            ParsedSpecification: The parsed specification

        Raises:
            UnsupportedFormatError: If the version marker is missing or unsupported
        """
        spec_type = self._detect_spec_type(document)
        resolver = ReferenceResolver(document, self.logger)

        info = document.get('info') or {}
        endpoints = self._parse_endpoints(document, spec_type, resolver)

        specification = ParsedSpecification(
            title=info.get('title') or 'API',
            version=str(info.get('version') or '1.0'),
            base_url=self._get_base_url(document, spec_type),
            spec_type=spec_type,
            endpoints=endpoints,
        )

        if self.logger:
            self.logger.log_debug(
                f"Parsed {spec_type.value} specification '{specification.title}' "
                f"with {len(endpoints)} endpoints"
            )
        return specification

    def _detect_spec_type(self, document: Any) -> SpecificationType:
        if not isinstance(document, dict):
            raise UnsupportedFormatError("Specification document must be a mapping")

        openapi = document.get('openapi')
        if isinstance(openapi, str) and openapi.startswith('3.'):
            return SpecificationType.OPENAPI_3

        swagger = document.get('swagger')
        if isinstance(swagger, str) and swagger.startswith('2.'):
            return SpecificationType.SWAGGER_2

        raise UnsupportedFormatError(
            "Unsupported specification format. Only Swagger 2.0 and OpenAPI 3.x are supported."
        )

    def _get_base_url(self, document: Dict[str, Any], spec_type: SpecificationType) -> Optional[str]:
        if spec_type == SpecificationType.OPENAPI_3:
            servers = document.get('servers') or []
            if servers and isinstance(servers[0], dict) and servers[0].get('url'):
                return servers[0]['url']
            return None

        host = document.get('host')
        if not host:
            return None
        schemes = document.get('schemes') or []
        scheme = schemes[0] if schemes else 'https'
        return f"{scheme}://{host}{document.get('basePath') or ''}"

    def _parse_endpoints(
        self,
        document: Dict[str, Any],
        spec_type: SpecificationType,
        resolver: ReferenceResolver
    ) -> List[Endpoint]:
        endpoints = []

        for path, path_item in (document.get('paths') or {}).items():
            path_item = resolver.resolve(path_item)
            if not isinstance(path_item, dict) or is_reference(path_item):
                continue

            for method in HttpMethod:
                operation = path_item.get(method.value)
                if not isinstance(operation, dict):
                    continue
                endpoints.append(
                    self._parse_operation(path, method, operation, path_item, spec_type, resolver)
                )

        return endpoints

    def _parse_operation(
        self,
        path: str,
        method: HttpMethod,
        operation: Dict[str, Any],
        path_item: Dict[str, Any],
        spec_type: SpecificationType,
        resolver: ReferenceResolver
    ) -> Endpoint:
        raw_params = self._merge_parameters(
            path_item.get('parameters') or [],
            operation.get('parameters') or [],
            resolver
        )

        if spec_type == SpecificationType.SWAGGER_2:
            # Swagger 2.0 declares the body as an "in: body" parameter
            request_body = None
            for param in raw_params:
                if param.get('in') == ParameterLocation.BODY.value:
                    request_body = BodySchema(
                        required=bool(param.get('required', False)),
                        content_type=DEFAULT_CONTENT_TYPE,
                        schema=resolver.resolve_deep(param.get('schema')),
                    )
                    break
        else:
            request_body = self._parse_request_body(operation.get('requestBody'), resolver)

        return Endpoint(
            id=f"{method.value.upper()} {path}",
            path=path,
            method=method,
            summary=operation.get('summary'),
            description=operation.get('description'),
            parameters=self._parse_parameters(raw_params, spec_type, resolver),
            request_body=request_body,
            responses=self._parse_responses(operation.get('responses') or {}, spec_type, resolver),
        )

    def _merge_parameters(
        self,
        path_params: List[Any],
        op_params: List[Any],
        resolver: ReferenceResolver
    ) -> List[Dict[str, Any]]:
        """Combine path-level and operation-level parameters; operation entries win."""
        merged: Dict[Tuple[Any, Any], Dict[str, Any]] = {}
        for raw in list(path_params) + list(op_params):
            param = resolver.resolve(raw)
            if not isinstance(param, dict) or is_reference(param):
                continue
            merged[(param.get('name'), param.get('in'))] = param
        return list(merged.values())

    def _parse_parameters(
        self,
        params: List[Dict[str, Any]],
        spec_type: SpecificationType,
        resolver: ReferenceResolver
    ) -> List[Parameter]:
        parameters = []

        for param in params:
            location = param.get('in')
            if location == ParameterLocation.BODY.value:
                continue
            try:
                location = ParameterLocation(location)
            except ValueError:
                # cookie and formData parameters have no slot in a data request
                continue

            if spec_type == SpecificationType.SWAGGER_2:
                schema = resolver.resolve_deep(param)
            else:
                schema = resolver.resolve_deep(param.get('schema'))
            schema = schema if isinstance(schema, dict) else None

            default = param.get('default')
            if default is None and schema:
                default = schema.get('default')

            parameters.append(Parameter(
                name=param.get('name', ''),
                location=location,
                required=bool(param.get('required', False)),
                type=self._get_parameter_type(schema),
                description=param.get('description'),
                default=default,
                enum=schema.get('enum') if schema else None,
                schema=schema,
            ))

        return parameters

    def _get_parameter_type(self, schema: Optional[Dict[str, Any]]) -> str:
        if not schema or is_reference(schema) or not schema.get('type'):
            return 'string'
        if schema['type'] == 'array':
            items = schema.get('items')
            item_type = items.get('type') if isinstance(items, dict) else None
            return f"array<{item_type or 'any'}>"
        return str(schema['type'])

    def _parse_request_body(self, request_body: Any, resolver: ReferenceResolver) -> Optional[BodySchema]:
        request_body = resolver.resolve(request_body)
        if not isinstance(request_body, dict) or is_reference(request_body):
            return None

        content = request_body.get('content') or {}
        content_type = next(iter(content), DEFAULT_CONTENT_TYPE)
        media_type = content.get(content_type) or {}

        return BodySchema(
            required=bool(request_body.get('required', False)),
            content_type=content_type,
            schema=resolver.resolve_deep(media_type.get('schema')),
        )

    def _parse_responses(
        self,
        responses: Dict[str, Any],
        spec_type: SpecificationType,
        resolver: ReferenceResolver
    ) -> Dict[str, ResponseSchema]:
        parsed = {}

        for status_code, raw in responses.items():
            response = resolver.resolve(raw)
            if is_reference(response):
                if self.logger:
                    self.logger.log_warning(
                        f"Unresolved response reference for status {status_code}: {response[REF_KEY]}"
                    )
                parsed[str(status_code)] = ResponseSchema(description='', schema=response)
                continue
            if not isinstance(response, dict):
                continue

            schema = None
            example = None
            if spec_type == SpecificationType.OPENAPI_3:
                content = response.get('content') or {}
                if content:
                    media_type = next(iter(content.values())) or {}
                    schema = resolver.resolve_deep(media_type.get('schema'))
                    example = self._media_type_example(media_type, resolver)
            else:
                schema = resolver.resolve_deep(response.get('schema'))
                example = (response.get('examples') or {}).get(DEFAULT_CONTENT_TYPE)

            parsed[str(status_code)] = ResponseSchema(
                description=response.get('description') or '',
                schema=schema,
                example=example,
            )

        return parsed

    def _media_type_example(self, media_type: Dict[str, Any], resolver: ReferenceResolver) -> Any:
        """The inline example of a media type, else the value of its first named example."""
        if 'example' in media_type:
            return media_type['example']

        examples = media_type.get('examples')
        if not isinstance(examples, dict):
            return None
        for named in examples.values():
            named = resolver.resolve(named)
            if isinstance(named, dict) and 'value' in named:
                return resolver.resolve_deep(named['value'])
        return None


def parse_specification(document: Dict[str, Any], logger: Optional[BaseLogger] = None) -> ParsedSpecification:
    """Parse a raw Swagger/OpenAPI document."""
    return SpecificationParser(logger).parse(document)
