#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Wrapper classes for security dictionaries defined in the Scripting API.
The engine only stores these declarations, it does not enforce them.
Each scheme is described by the JSON Schema of its specific fields,
which provides both the validation rules and the default values.
"""

import jsonschema
import jsonschema.exceptions

from wotengine.utils.utils import merge_args_kwargs_dict
from wotengine.wot.dictionaries.base import WotBaseDict
from wotengine.wot.enums import SecuritySchemeType
from wotengine.wot.validation import InvalidDescription

SCHEME_ALIASES = {
    "none": SecuritySchemeType.NOSEC,
    "proof-of-possession": SecuritySchemeType.POP,
    "pre-shared-key": SecuritySchemeType.PSK
}

COMMON_FIELDS = {
    "scheme": {"type": "string"},
    "description": {"type": "string"},
    "proxy": {"type": "string"}
}

_LOCATION = {"type": "string", "enum": ["header", "query", "body", "cookie"]}
_STRING = {"type": "string"}

_TOKEN_FIELDS = {
    "authorization": _STRING,
    "alg": dict(_STRING, default="ES256"),
    "format": dict(_STRING, default="jwt"),
    "in": dict(_LOCATION, default="header"),
    "name": _STRING
}

SCHEME_FIELDS = {
    SecuritySchemeType.NOSEC: {},
    SecuritySchemeType.BASIC: {
        "in": dict(_LOCATION, default="header"),
        "name": _STRING
    },
    SecuritySchemeType.DIGEST: {
        "qop": {"type": "string", "enum": ["auth", "auth-int"], "default": "auth"},
        "in": dict(_LOCATION, default="header"),
        "name": _STRING
    },
    SecuritySchemeType.BEARER: _TOKEN_FIELDS,
    SecuritySchemeType.POP: _TOKEN_FIELDS,
    SecuritySchemeType.PSK: {
        "identity": _STRING
    },
    SecuritySchemeType.OAUTH2: {
        "authorization": _STRING,
        "token": _STRING,
        "refresh": _STRING,
        "scopes": {
            "oneOf": [
                _STRING,
                {"type": "array", "items": _STRING}
            ]
        },
        "flow": {"type": "string", "enum": ["implicit", "password", "client", "code"], "default": "implicit"}
    },
    SecuritySchemeType.APIKEY: {
        "in": dict(_LOCATION, default="query"),
        "name": _STRING
    }
}


def normalize_scheme(scheme):
    """Returns the scheme identifier for the given scheme name or alias."""

    return SCHEME_ALIASES.get(scheme, scheme)


def _scheme_meta(scheme_type=None):
    """Builds the Meta declaration of a scheme dictionary from the schema of its fields."""

    props = SCHEME_FIELDS.get(scheme_type, {})

    return type("Meta", (object,), {
        "fields": set(COMMON_FIELDS).union(props),
        "required": {"scheme"},
        "defaults": {key: val["default"] for key, val in props.items() if "default" in val}
    })


class SecuritySchemeDict(WotBaseDict):
    """Contains security related configuration.
    The scheme may be given by its identifier (e.g. psk) or by its
    long name (e.g. pre-shared-key). Raises InvalidDescription if the
    scheme-specific fields do not conform to the scheme."""

    scheme_type = None

    Meta = _scheme_meta()

    def __init__(self, *args, **kwargs):
        super(SecuritySchemeDict, self).__init__(*args, **kwargs)

        self._init["scheme"] = normalize_scheme(self._init["scheme"])

        if self.scheme_type is not None and self._init["scheme"] != self.scheme_type:
            raise InvalidDescription("Scheme {} does not match {}".format(
                self._init["scheme"], self.__class__.__name__))

        self._validate_fields()

    def _validate_fields(self):
        schema = {
            "type": "object",
            "properties": dict(COMMON_FIELDS, **SCHEME_FIELDS.get(self.scheme_type, {}))
        }

        validator = jsonschema.Draft7Validator(schema)
        error = jsonschema.exceptions.best_match(validator.iter_errors(self._init))

        if error is not None:
            raise InvalidDescription("Invalid {} scheme: {}".format(self.scheme, error.message))

    @classmethod
    def build(cls, *args, **kwargs):
        """Builds an instance of the appropriate subclass for the given SecurityScheme."""

        init_dict = merge_args_kwargs_dict(args, kwargs)
        scheme = normalize_scheme(init_dict.get("scheme"))
        klass = SECURITY_SCHEME_CLASSES.get(scheme)

        if not klass:
            raise InvalidDescription("Unknown scheme: {}".format(scheme))

        return klass(*args, **kwargs)

    @property
    def scheme(self):
        """Identifier of the security scheme (an item of SecuritySchemeType)."""

        return self.scheme_type if self.scheme_type else self._init.get("scheme")


class NoSecuritySchemeDict(SecuritySchemeDict):
    """No authentication or other mechanism is required to access the resource."""

    scheme_type = SecuritySchemeType.NOSEC
    Meta = _scheme_meta(scheme_type)


class BasicSecuritySchemeDict(SecuritySchemeDict):
    """Basic authentication using an unencrypted username and password."""

    scheme_type = SecuritySchemeType.BASIC
    Meta = _scheme_meta(scheme_type)


class DigestSecuritySchemeDict(SecuritySchemeDict):
    """Digest authentication (basic authentication protected against man-in-the-middle attacks)."""

    scheme_type = SecuritySchemeType.DIGEST
    Meta = _scheme_meta(scheme_type)


class BearerSecuritySchemeDict(SecuritySchemeDict):
    """Bearer tokens used independently of OAuth2."""

    scheme_type = SecuritySchemeType.BEARER
    Meta = _scheme_meta(scheme_type)


class PoPSecuritySchemeDict(SecuritySchemeDict):
    """Proof-of-possession token authentication."""

    scheme_type = SecuritySchemeType.POP
    Meta = _scheme_meta(scheme_type)


class PSKSecuritySchemeDict(SecuritySchemeDict):
    """Pre-shared key authentication."""

    scheme_type = SecuritySchemeType.PSK
    Meta = _scheme_meta(scheme_type)


class OAuth2SecuritySchemeDict(SecuritySchemeDict):
    """OAuth2 authentication.
    For the implicit flow the authorization and scopes are required.
    For the password and client flows both token and scopes are required.
    For the code flow authorization, token, and scopes are required."""

    scheme_type = SecuritySchemeType.OAUTH2
    Meta = _scheme_meta(scheme_type)


class APIKeySecuritySchemeDict(SecuritySchemeDict):
    """API key authentication with an opaque access token."""

    scheme_type = SecuritySchemeType.APIKEY
    Meta = _scheme_meta(scheme_type)


SECURITY_SCHEME_CLASSES = {
    klass.scheme_type: klass for klass in (
        NoSecuritySchemeDict,
        BasicSecuritySchemeDict,
        DigestSecuritySchemeDict,
        BearerSecuritySchemeDict,
        PoPSecuritySchemeDict,
        PSKSecuritySchemeDict,
        OAuth2SecuritySchemeDict,
        APIKeySecuritySchemeDict
    )
}
