#coding: utf-8

import collections
import collections.abc


class ParameterDict:
    """Dictionary, that has ordered case-insensitive keys.

    Keys are retained in their original form
    when queried with .keys() or .items().

    Implementation: An internal dictionary maps lowercase
    keys to (key,value) pairs. All key lookups are done
    against the lowercase keys, but all methods that expose
    keys to the user retrieve the original keys."""

    def __init__(self, dictorlist=None):
        """Create an empty dictionary, or update from 'dict'."""
        self._dict = collections.OrderedDict()
        if isinstance(dictorlist, dict):
            self.update(dictorlist)
        elif dictorlist is not None:
            for k,v in dictorlist:
                self[k] = v

    @classmethod
    def fromstring(cls, string, separator=';'):
        """Split 'name=value' items on 'separator', and each item on its first '='.
        An item without '=' gets the value None."""
        d = cls()
        if string:
            for item in string.split(separator):
                k,_,v = item.partition('=')
                d[k] = v if _ else None
        return d

    def __bool__(self):
        return bool(self._dict)

    def __len__(self):
        return len(self._dict)

    def __getitem__(self, key):
        """Retrieve the value associated with 'key' (in any case)."""
        k = key.lower()
        return self._dict[k][1]

    def __setitem__(self, key, value):
        """Associate 'value' with 'key'. If 'key' already exists, but
        in different case, it will be replaced."""
        k = key.lower()
        self._dict[k] = (key, value)

    def __contains__(self, key):
        """Case insensitive test wether 'key' exists."""
        return key.lower() in self._dict

    def __eq__(self, other):
        if isinstance(other, ParameterDict):
            return list(self._dict.items()) == list(other._dict.items())
        if isinstance(other, dict):
            return self == ParameterDict(other)
        return NotImplemented

    def keys(self):
        """List of keys in their original case."""
        return [v[0] for v in self._dict.values()]

    def __iter__(self):
        for k in self.keys():
            yield k

    def values(self):
        """List of values."""
        return [v[1] for v in self._dict.values()]

    def items(self):
        """List of (key,value) pairs."""
        return list(self._dict.values())

    def get(self, key, default=None):
        """Retrieve value associated with 'key' or return default value
        if 'key' doesn't exist."""
        try:
            return self[key]
        except KeyError:
            return default

    def pop(self, key, default=None):
        """If key is in the dictionary, remove it and return its value, else return default."""
        k = key.lower()
        if k not in self._dict:
            return default
        return self._dict.pop(k)[1]

    def update(self, dict):
        """Copy (key,value) pairs from 'dict'."""
        for k,v in dict.items():
            self[k] = v

    def tostring(self, separator=';'):
        return separator.join(k if v is None else '{}={}'.format(k, v) for k,v in self.items())

    def __repr__(self):
        """String representation of the dictionary."""
        items = ", ".join([("%r: %r" % (k,v)) for k,v in self.items()])
        return "{%s}" % items

    def __str__(self):
        """String representation of the dictionary."""
        return repr(self)


#
# Shapes accepted for the header (and parameter) list of a built URI.
# The shape is resolved once by HeaderInput.wrap(); encoding never
# inspects the value again.
class HeaderInput:
    def __init__(self, value):
        self.value = value

    @staticmethod
    def wrap(value):
        if isinstance(value, HeaderInput):
            return value
        if isinstance(value, (collections.abc.Mapping, ParameterDict)):
            return Map(value)
        if isinstance(value, (list, tuple)):
            return Pairs(value)
        return Raw(value)

    def __bool__(self):
        return bool(self.value)

    def encode(self, separator='&'):
        raise NotImplementedError

    def __repr__(self):
        return "{}({!r})".format(self.__class__.__name__, self.value)

class Pairs(HeaderInput):
    # [['subject', 'hello'], ['to', 'bob@example.com'], 'x=y']
    def encode(self, separator='&'):
        items = []
        for x in self.value:
            if isinstance(x, (list, tuple)):
                items.append(str(x[0]) + '=' + ''.join(str(v) for v in x[1:]))
            else:
                items.append(str(x))
        return separator.join(items)

class Map(HeaderInput):
    # {'subject': 'hello', 'to': 'bob@example.com'}
    def encode(self, separator='&'):
        return separator.join(str(h) + '=' + str(v) for h,v in self.value.items())

class Raw(HeaderInput):
    # 'subject=hello&to=bob@example.com'
    def __bool__(self):
        return self.value is not None and str(self.value) != ''

    def encode(self, separator='&'):
        return str(self.value)


def makecomponents(klass, args):
    """Normalize the arguments of klass.build() into a component mapping.

    A list or tuple is positional over klass.BUILD_COMPONENT; a mapping is
    checked against klass.COMPONENT, klass.BUILD_COMPONENT and 'fragment'."""
    if isinstance(args, (list, tuple)):
        if len(args) != len(klass.BUILD_COMPONENT):
            raise ValueError("expected {} positional components ({}), got {}".format(len(klass.BUILD_COMPONENT), ', '.join(klass.BUILD_COMPONENT), len(args)))
        return dict(zip(klass.BUILD_COMPONENT, args))
    if isinstance(args, collections.abc.Mapping):
        allowed = set(klass.COMPONENT) | set(klass.BUILD_COMPONENT) | {'fragment'}
        unknown = [k for k in args if k not in allowed]
        if unknown:
            raise ValueError("unknown components {} for {}. Possible values are {}".format(unknown, klass.__name__, sorted(allowed)))
        return dict(args)
    raise TypeError("expected a list or a mapping of components, got {}".format(type(args).__name__))
