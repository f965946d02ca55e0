#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that represent the notifications delivered by the observable channels of a Thing:
Event emissions, Property changes and Thing Description changes.
"""

import time

from wotengine.wot.enums import DefaultThingEvent, TDChangeType, TDChangeMethod


class EmittedEvent(object):
    """A notification delivered to the subscribers of a Thing.
    The data attribute contains the Event payload or the init object of the
    default events (property change and TD change)."""

    def __init__(self, init, name):
        self.init = init
        self.name = name
        self.timestamp = time.time()

    def __repr__(self):
        return "<{}> {} {!r}".format(self.__class__.__name__, self.name, self.data)

    @property
    def data(self):
        """Payload of the notification."""

        return self.init

    def to_dict(self):
        """Returns a dict representation of the notification."""

        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data

        return {"name": self.name, "data": data, "timestamp": self.timestamp}


class PropertyChangeEmittedEvent(EmittedEvent):
    """Notification of a committed Property write.
    Initialized with a PropertyChangeEventInit."""

    def __init__(self, init):
        super(PropertyChangeEmittedEvent, self).__init__(init=init, name=DefaultThingEvent.PROPERTY_CHANGE)


class ThingDescriptionChangeEmittedEvent(EmittedEvent):
    """Notification of a change in the set of interactions (or their handlers) of a Thing.
    Initialized with a ThingDescriptionChangeEventInit."""

    def __init__(self, init):
        super(ThingDescriptionChangeEmittedEvent, self).__init__(init=init, name=DefaultThingEvent.DESCRIPTION_CHANGE)


class PropertyChangeEventInit(object):
    """Data of a Property change.

    Args:
        name (str): Name of the Property.
        value: New value of the Property.
        old_value: Value that was cached before the write (None if there was none).
    """

    def __init__(self, name, value, old_value=None):
        self.name = name
        self.value = value
        self.old_value = old_value

    def to_dict(self):
        return {"name": self.name, "value": self.value, "oldValue": self.old_value}


class ThingDescriptionChangeEventInit(object):
    """Data of a Thing Description change.

    Args:
        td_change_type (str): An item of enumeration :py:class:`.TDChangeType`.
        method (str): An item of enumeration :py:class:`.TDChangeMethod`.
        name (str): Name of the Interaction.
        data (dict): The interaction fragment serialized to a dict
            (or ``None`` if the change removed the interaction).
        description (dict): The full TD document after the change.
    """

    def __init__(self, td_change_type, method, name, data=None, description=None):
        if td_change_type not in TDChangeType.list():
            raise ValueError("Unknown TD change type: {}".format(td_change_type))

        if method not in TDChangeMethod.list():
            raise ValueError("Unknown TD change method: {}".format(method))

        self.td_change_type = td_change_type
        self.method = method
        self.name = name
        self.data = data
        self.description = description

    def to_dict(self):
        """Returns the change in the shape of a TD change notification
        (changeType, method, name, data and newDescription)."""

        return {
            "changeType": self.td_change_type,
            "method": self.method,
            "name": self.name,
            "data": self.data,
            "newDescription": self.description
        }
