#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Semantic annotations (JSON-LD @type, @context and metadata terms) of Things and Interactions.
The engine builds and preserves these annotations but does not reason over them.
"""

import copy

from wotengine.utils.utils import merge_args_kwargs_dict

KEY_TYPE = "@type"
KEY_CONTEXT = "@context"


class SemanticType(object):
    """A semantic type annotation: a name in the given context with an optional prefix.

    Args:
        name (str): Name of the type in its context.
        context (str): URL of the context that defines the type.
        prefix (str): Prefix used for the type in the serialized document.
    """

    def __init__(self, name, context=None, prefix=None):
        if not name:
            raise ValueError("Semantic types require a name")

        self.name = name
        self.context = context
        self.prefix = prefix

    def __eq__(self, other):
        return isinstance(other, SemanticType) and \
               (self.name, self.context, self.prefix) == (other.name, other.context, other.prefix)

    def __hash__(self):
        return hash((self.name, self.context, self.prefix))

    def __repr__(self):
        return "<{}> {}".format(self.__class__.__name__, self.term)

    @classmethod
    def build(cls, *args, **kwargs):
        """Builds a SemanticType from another instance, a plain name or
        a dict with the name, context and prefix keys."""

        if len(args) == 1 and not kwargs:
            if isinstance(args[0], SemanticType):
                return args[0]

            if isinstance(args[0], str):
                return cls(name=args[0])

        init = merge_args_kwargs_dict(args, kwargs)

        return cls(name=init.get("name"), context=init.get("context"), prefix=init.get("prefix"))

    @property
    def term(self):
        """The term that identifies this type in the serialized document."""

        return "{}:{}".format(self.prefix, self.name) if self.prefix else self.name

    @property
    def context_entry(self):
        """The @context entry that declares this type (None if there is no context)."""

        if not self.context:
            return None

        return {self.prefix: self.context} if self.prefix else self.context


class SemanticMetadata(object):
    """A metadata term (e.g. a unit) whose key is given by a SemanticType."""

    def __init__(self, semantic_type, value):
        self.semantic_type = SemanticType.build(semantic_type)
        self.value = value

    @classmethod
    def build(cls, *args, **kwargs):
        """Builds a SemanticMetadata from another instance or a dict with the type and value keys."""

        if len(args) == 1 and isinstance(args[0], SemanticMetadata):
            return args[0]

        init = merge_args_kwargs_dict(args, kwargs)

        if "type" not in init:
            raise ValueError("Semantic metadata requires a type")

        return cls(semantic_type=init["type"], value=init.get("value"))


class ThingSemanticContext(object):
    """An ordered container for the entries of a JSON-LD @context.
    Existing entries are kept as they are and duplicates are ignored."""

    def __init__(self, context=None):
        if context is None:
            self._entries = []
        elif isinstance(context, list):
            self._entries = copy.deepcopy(context)
        else:
            self._entries = [copy.deepcopy(context)]

    @property
    def context_entries(self):
        """List of the entries contained in this instance."""

        return list(self._entries)

    def add(self, context_url, prefix=None):
        """Add a new context entry. Returns True if the entry was not already present."""

        entry = {prefix: context_url} if prefix else context_url

        if entry in self._entries:
            return False

        self._entries.append(entry)

        return True

    def remove(self, context_url, prefix=None):
        """Remove an existing context entry."""

        entry = {prefix: context_url} if prefix else context_url

        if entry in self._entries:
            self._entries.remove(entry)

    def to_jsonld(self):
        """Returns the entries ready to be included in a JSON-LD document:
        a single entry is serialized on its own and several entries as a list."""

        if not self._entries:
            return None

        return self._entries[0] if len(self._entries) == 1 else list(self._entries)


def annotate(annotations, semantic_types=None, metadata=None):
    """Returns a copy of the annotations dict (the opaque keys of a Thing or Interaction)
    with the given semantic types added to @type, the metadata added as terms and
    the contexts they require added to @context. Keys are only rewritten when
    something new is added to them."""

    ret = copy.deepcopy(annotations) if annotations else {}

    context = ThingSemanticContext(ret.get(KEY_CONTEXT))
    context_changed = False

    types = ret.get(KEY_TYPE, [])
    types = list(types) if isinstance(types, list) else [types]
    types_changed = False

    def add_context(semantic_type):
        if semantic_type.context:
            return context.add(semantic_type.context, prefix=semantic_type.prefix)

        return False

    for item in semantic_types or []:
        semantic_type = SemanticType.build(item)

        if semantic_type.term not in types:
            types.append(semantic_type.term)
            types_changed = True

        context_changed = add_context(semantic_type) or context_changed

    for item in metadata or []:
        meta = SemanticMetadata.build(item)
        ret[meta.semantic_type.term] = copy.deepcopy(meta.value)
        context_changed = add_context(meta.semantic_type) or context_changed

    if types_changed:
        ret[KEY_TYPE] = types[0] if len(types) == 1 else types

    if context_changed:
        ret[KEY_CONTEXT] = context.to_jsonld()

    return ret
