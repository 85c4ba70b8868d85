#coding: utf-8

import logging
log = logging.getLogger('URI')

from . import Utils
from .URIBNF import InvalidComponentError
from .URIParser import DEFAULT_PARSER


class Generic:
    """Base of the scheme handlers: a scheme, an opaque body and a fragment.

    Instances are built with no syntax checking (that is the job of the
    parser that split the string) unless arg_check is set, which build()
    does."""
    DEFAULT_PORT = None
    COMPONENT = ('scheme', 'opaque', 'fragment')
    BUILD_COMPONENT = COMPONENT

    @classmethod
    def component(cls):
        return cls.COMPONENT

    @classmethod
    def build(cls, args):
        # always normalized against the generic components, whatever the
        # handler class that is finally instantiated
        tmp = Utils.makecomponents(Generic, args)
        return cls(arg_check=True, **tmp)

    def __init__(self, scheme=None, opaque=None, fragment=None, parser=None, arg_check=False):
        self.parser = parser or DEFAULT_PARSER
        if arg_check:
            self._check_scheme(scheme)
            self._check_opaque(opaque)
            self._check_fragment(fragment)
        self._scheme = scheme
        self._opaque = opaque
        self._fragment = fragment

    def _check_scheme(self, v):
        if not v or not self.parser.grammar['SCHEME'].matches(v):
            log.logandraise(InvalidComponentError('scheme', v))

    def _check_opaque(self, v):
        if not v:
            return
        if not self.parser.grammar['OPAQUE'].matches(v):
            log.logandraise(InvalidComponentError('opaque', v))

    def _check_fragment(self, v):
        if v is None:
            return
        if not self.parser.grammar['FRAGMENT'].matches(v):
            log.logandraise(InvalidComponentError('fragment', v))

    @property
    def scheme(self):
        return self._scheme

    @property
    def opaque(self):
        return self._opaque

    @property
    def fragment(self):
        return self._fragment
    @fragment.setter
    def fragment(self, v):
        self._check_fragment(v)
        self._fragment = v

    def select(self, *components):
        for c in components:
            if c not in self.component():
                raise ValueError("expected one of {}, got {!r}".format(self.component(), c))
        return [getattr(self, c) for c in components]

    def to_s(self):
        return '{}:{}{}'.format(self._scheme, self._opaque or '', '#' + self._fragment if self._fragment is not None else '')

    def __str__(self):
        return self.to_s()

    def __repr__(self):
        return "{}({})".format(self.__class__.__name__, ", ".join(["{}={!r}".format(c, getattr(self, c)) for c in self.component()]))

    def _key(self):
        scheme,_,rest = self.to_s().partition(':')
        return scheme.lower(), rest

    def __eq__(self, other):
        if self.__class__ is not other.__class__:
            return NotImplemented
        return self._key() == other._key()
