#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that represent all interaction patterns.
"""

from abc import ABCMeta, abstractmethod

from slugify import slugify

from wotengine.wot.constants import DEFAULT_CONTENT_TYPE
from wotengine.wot.dictionaries.interaction import PropertyFragmentDict, ActionFragmentDict, EventFragmentDict
from wotengine.wot.enums import InteractionTypes, InteractionVerbs
from wotengine.wot.form import Form
from wotengine.wot.validation import is_valid_safe_name


class InteractionPattern(object, metaclass=ABCMeta):
    """A functionality exposed by Thing that is defined by the TD Interaction Model."""

    def __init__(self, thing, name, init_dict=None, **kwargs):
        if not is_valid_safe_name(name):
            raise ValueError("Invalid Interaction name: {}".format(name))

        self._init_dict = init_dict if init_dict else self.init_class(**kwargs)

        self._thing = thing
        self._name = name
        self._forms = [
            Form(interaction=self, form_dict=form_dict)
            for form_dict in self._init_dict.forms
        ]

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private init dict before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._init_dict, name)

    @property
    @abstractmethod
    def init_class(self):
        """Returns the init dict class for this type of interaction."""

        raise NotImplementedError()

    @property
    @abstractmethod
    def interaction_type(self):
        """Interaction type."""

        raise NotImplementedError()

    @property
    @abstractmethod
    def collection_name(self):
        """Name of the TD member that contains this type of interaction."""

        raise NotImplementedError()

    @property
    @abstractmethod
    def default_ops(self):
        """Operation types of the default Form of this interaction."""

        raise NotImplementedError()

    @property
    def interaction_fragment(self):
        """The InteractionFragment dictionary of this interaction."""

        return self._init_dict

    @property
    def thing(self):
        """Thing that contains this Interaction."""

        return self._thing

    @property
    def name(self):
        """Interaction name.
        No two Interactions of the same type with the same name may exist in a Thing."""

        return self._name

    @property
    def url_name(self):
        """URL-safe version of the name."""

        return slugify(self.name)

    @property
    def default_form(self):
        """Form derived from the interaction type and name.
        Used when no custom Forms have been declared."""

        return Form(
            interaction=self,
            href="{}/{}".format(self.collection_name, self.name),
            content_type=DEFAULT_CONTENT_TYPE,
            op=self.default_ops)

    @property
    def forms(self):
        """Sequence of forms linked to this interaction.
        There is always at least one Form."""

        return list(self._forms) if self._forms else [self.default_form]

    def clean_forms(self):
        """Removes all the custom Forms from this Interaction."""

        self._forms = []

    def add_form(self, form):
        """Add a new Form."""

        assert form.interaction is self

        existing = next((True for item in self._forms if item.id == form.id), False)

        if existing:
            raise ValueError("Duplicate Form: {}".format(form))

        self._forms.append(form)

    def remove_form(self, form):
        """Remove an existing Form."""

        try:
            pop_idx = self._forms.index(form)
            self._forms.pop(pop_idx)
        except ValueError:
            pass

    def to_dict(self):
        """Returns the TD serialization of this interaction including its Forms."""

        ret = self.interaction_fragment.to_dict()
        ret["forms"] = [form.form_dict.to_dict() for form in self.forms]

        return ret


class Property(InteractionPattern):
    """Properties expose internal state of a Thing that can be
    directly accessed (get) and optionally manipulated (set)."""

    @property
    def init_class(self):
        """Returns the init dict class for this type of interaction."""

        return PropertyFragmentDict

    @property
    def interaction_type(self):
        """Interaction type."""

        return InteractionTypes.PROPERTY

    @property
    def collection_name(self):
        return "properties"

    @property
    def default_ops(self):
        ops = [InteractionVerbs.READ_PROPERTY]

        if self.interaction_fragment.writable:
            ops.append(InteractionVerbs.WRITE_PROPERTY)

        if self.interaction_fragment.observable:
            ops.append(InteractionVerbs.OBSERVE_PROPERTY)

        return ops


class Action(InteractionPattern):
    """Actions offer functions of the Thing. These functions may manipulate the
    internal state of a Thing in a way that is not possible through setting Properties."""

    @property
    def init_class(self):
        """Returns the init dict class for this type of interaction."""

        return ActionFragmentDict

    @property
    def interaction_type(self):
        """Interaction type."""

        return InteractionTypes.ACTION

    @property
    def collection_name(self):
        return "actions"

    @property
    def default_ops(self):
        return [InteractionVerbs.INVOKE_ACTION]


class Event(InteractionPattern):
    """The Event Interaction Pattern describes event sources that asynchronously push messages.
    Here not state, but state transitions (events) are communicated (e.g., clicked)."""

    @property
    def init_class(self):
        """Returns the init dict class for this type of interaction."""

        return EventFragmentDict

    @property
    def interaction_type(self):
        """Interaction type."""

        return InteractionTypes.EVENT

    @property
    def collection_name(self):
        return "events"

    @property
    def default_ops(self):
        return [InteractionVerbs.SUBSCRIBE_EVENT]


INTERACTION_CLASSES = {
    InteractionTypes.PROPERTY: Property,
    InteractionTypes.ACTION: Action,
    InteractionTypes.EVENT: Event
}
