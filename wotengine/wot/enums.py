#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that contain various enumerations.
"""

from wotengine.utils.enums import EnumListMixin


class DiscoveryMethod(EnumListMixin):
    """Enumeration of discovery types.
    Implementations may accept additional methods as arbitrary strings."""

    ANY = "any"
    LOCAL = "local"
    DIRECTORY = "directory"
    MULTICAST = "multicast"
    NEARBY = "nearby"
    BROADCAST = "broadcast"
    OTHER = "other"


class TDChangeType(EnumListMixin):
    """Represents the change type, whether has it been
    applied on properties, Actions or Events."""

    PROPERTY = "property"
    ACTION = "action"
    EVENT = "event"


class TDChangeMethod(EnumListMixin):
    """This attribute tells what operation has been
    applied to the TD: addition, removal or change."""

    ADD = "add"
    REMOVE = "remove"
    CHANGE = "change"


class DefaultThingEvent(EnumListMixin):
    """Enumeration for the default events
    that are supported on all ExposedThings."""

    PROPERTY_CHANGE = "propertychange"
    DESCRIPTION_CHANGE = "descriptionchange"


class DataType(EnumListMixin):
    """Defines the types that values can take."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


class SecuritySchemeType(EnumListMixin):
    """Defines the supported security schemes."""

    NOSEC = "nosec"
    BASIC = "basic"
    DIGEST = "digest"
    BEARER = "bearer"
    POP = "pop"
    PSK = "psk"
    OAUTH2 = "oauth2"
    APIKEY = "apikey"


class InteractionTypes(EnumListMixin):
    """Enumeration of interaction types."""

    PROPERTY = "Property"
    ACTION = "Action"
    EVENT = "Event"


class InteractionVerbs(EnumListMixin):
    """Operation types that are declared in the Forms of each interaction pattern."""

    READ_PROPERTY = "readproperty"
    WRITE_PROPERTY = "writeproperty"
    OBSERVE_PROPERTY = "observeproperty"
    INVOKE_ACTION = "invokeaction"
    SUBSCRIBE_EVENT = "subscribeevent"


class HandlerKeys(EnumListMixin):
    """Enumeration of handler keys."""

    RETRIEVE_PROPERTY = "retrieve_property"
    UPDATE_PROPERTY = "update_property"
    INVOKE_ACTION = "invoke_action"


class HubChannels(EnumListMixin):
    """Notification channels that exist for every ExposedThing."""

    PROPERTY_CHANGE = "property"
    EVENT = "event"
    TD_CHANGE = "td"


class RequestState(EnumListMixin):
    """States that an interaction request goes through in the dispatcher."""

    RECEIVED = "received"
    VALIDATING = "validating"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class ThingState(EnumListMixin):
    """Lifecycle states of an ExposedThing."""

    CREATED = "created"
    EXPOSED = "exposed"
    DESTROYED = "destroyed"
