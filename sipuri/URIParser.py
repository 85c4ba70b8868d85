#coding: utf-8

import collections
import urllib.parse
import logging
log = logging.getLogger('URI')

from . import URIBNF
from .URIBNF import InvalidURIError, BadURIError, ParseException


GRAMMAR = {'URI':      URIBNF.Parser('URI-reference', URIBNF.URI_reference),
           'SCHEME':   URIBNF.Parser('scheme', URIBNF.scheme),
           'OPAQUE':   URIBNF.Parser('opaque-part', URIBNF.opaque_part),
           'FRAGMENT': URIBNF.Parser('fragment', URIBNF.fragment)}


#
# Scheme name --> handler class
#  names are case insensitive and kept upper case
#  lookup of an unregistered scheme falls back to 'default' if any
class SchemeRegistry:
    def __init__(self, default=None):
        self._schemes = collections.OrderedDict()
        self.default = default

    def register(self, name, klass):
        key = name.upper()
        if key in self._schemes:
            raise ValueError("scheme {} already registered to {}".format(key, self._schemes[key].__name__))
        self._schemes[key] = klass
        return klass

    def unregister(self, name):
        return self._schemes.pop(name.upper())

    def lookup(self, scheme):
        klass = self._schemes.get(scheme.upper(), self.default)
        if klass is None:
            log.logandraise(BadURIError("no handler registered for scheme {!r}".format(scheme)))
        return klass

    def schemes(self):
        return list(self._schemes)

    def __contains__(self, name):
        return name.upper() in self._schemes

    def __repr__(self):
        return "SchemeRegistry({})".format(", ".join("{}={}".format(k, v.__name__) for k,v in self._schemes.items()))


class URIParser:
    def __init__(self, registry=None):
        self.registry = registry if registry is not None else SchemeRegistry()
        self.grammar = GRAMMAR

    def split(self, uri):
        if not isinstance(uri, str):
            raise TypeError("URI should be of type str, not {}".format(type(uri).__name__))
        try:
            res = self.grammar['URI'].parse(uri)
        except ParseException as e:
            log.logandraise(InvalidURIError('URI', uri, e.pos))
        return res['scheme'], res['opaque'], res.get('fragment')

    def parse(self, uri):
        scheme, opaque, fragment = self.split(uri)
        klass = self.registry.lookup(scheme)
        log.debug("{} --> {}".format(scheme, klass.__name__))
        return klass(scheme=scheme, opaque=opaque, fragment=fragment, parser=self)

    def unescape(self, string):
        return urllib.parse.unquote(string)

DEFAULT_PARSER = URIParser()
