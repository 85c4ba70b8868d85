#coding: utf-8

import pyparsing as pp


class URIError(Exception):
    pass

class InvalidURIError(URIError):
    def __init__(self, name, value, pos=None):
        super().__init__(name, value, pos)
        self.name = name
        self.value = value
        self.pos = pos
    def __str__(self):
        if self.pos is None:
            return "{!r} is not a valid {}".format(self.value, self.name)
        return "{!r} is not a valid {}. Error at pos={} ({})".format(self.value, self.name, self.pos, self.value[self.pos-1] if 0 < self.pos <= len(self.value) else '')

class InvalidComponentError(URIError):
    def __init__(self, component, value):
        super().__init__(component, value)
        self.component = component
        self.value = value
    def __str__(self):
        return "bad component({}): {!r}".format(self.component, self.value)

class UnrecognizedOpaquePartError(InvalidComponentError):
    def __init__(self, value):
        super().__init__('opaque', value)
    def __str__(self):
        return "unrecognised opaque part for SIP URL: {!r}".format(self.value)

class BadURIError(URIError):
    pass


class ParseException(Exception):
    def __init__(self, name, value, pos):
        self.name = name
        self.value = value
        self.pos = pos
    def __str__(self):
        return "{!r} is not a valid {}. Error at pos={} ({})".format(self.value, self.name, self.pos, self.value[self.pos-1] if 0 < self.pos <= len(self.value) else '')

class Parser:
    def __init__(self, name, ppParser):
        self.name = name
        self.parser = ppParser + pp.StringEnd()
        self.parser.leave_whitespace()
        self.parser.set_whitespace_chars('')
        self.parser.parse_with_tabs()
    def parse(self, string):
        try:
            return self.parser.parse_string(string)
        except pp.ParseException as e:
            raise ParseException(self.name, string, e.col) from None
    def matches(self, string):
        try:
            self.parse(string)
        except ParseException:
            return False
        return True
    def __repr__(self):
        return "Parser({!r})".format(self.name)


#   RFC 2396 (as amended by RFC 2732 for "[" and "]"):
#
#      reserved    =  ";" / "/" / "?" / ":" / "@" / "&" / "=" / "+"
#                     / "$" / "," / "[" / "]"
#      unreserved  =  alphanum / mark
#      mark        =  "-" / "_" / "." / "!" / "~" / "*" / "'"
#                     / "(" / ")"
#      escaped     =  "%" hex hex
HEXDIG = pp.hexnums
unreserved = pp.alphanums + '-_.!~*\'()'
reserved = ';/?:@&=+$,[]'
escaped = pp.Literal('%') + pp.Word(HEXDIG, exact=2)


#      uric           =  reserved / unreserved / escaped
#      uric-no-slash  =  unreserved / escaped / ";" / "?" / ":" / "@"
#                        / "&" / "=" / "+" / "$" / "," / "["
#      opaque-part    =  uric-no-slash *uric
#
#   "[" is allowed first (RFC 2732) so that an opaque body may start with
#   an IPv6 reference.
#      fragment       =  *uric
#      scheme         =  alpha *( alpha / digit / "+" / "-" / "." )
#      absoluteURI    =  scheme ":" ( hier_part / opaque_part )
#      URI-reference  =  [ absoluteURI | relativeURI ] [ "#" fragment ]
#
#   The hierarchical part is not decomposed here: a scheme handler that
#   needs it receives it as the opaque body.
uric = pp.Combine(pp.ZeroOrMore(pp.Word(unreserved+reserved) ^ escaped))
opaque_part = pp.Combine((pp.Char(unreserved+';?:@&=+$,[') ^ escaped) + uric)
hier_part = pp.Combine(pp.Literal('/') + uric)
fragment = uric.copy()
scheme = pp.Word(pp.alphas, pp.alphanums+'+-.')
absoluteURI = scheme('scheme') + pp.Suppress(pp.Literal(':')) + (hier_part ^ opaque_part)('opaque')
URI_reference = absoluteURI + pp.Optional(pp.Suppress(pp.Literal('#')) + fragment('fragment'))


#   The same productions as regular expression fragments, for the
#   anchored component patterns of the scheme handlers.
#
#      userinfo     =  *( unreserved / escaped / ";" / ":" / "&" / "="
#                       / "+" / "$" / "," )
#      hostname     =  *( domainlabel "." ) toplabel [ "." ]
#      domainlabel  =  alphanum / alphanum *( alphanum / "-" ) alphanum
#      toplabel     =  alpha / alpha *( alphanum / "-" ) alphanum
#      IPv4address  =  1*digit "." 1*digit "." 1*digit "." 1*digit
#      IPv6reference = "[" IPv6address "]"
#      host         =  hostname / IPv4address / IPv6reference
ESCAPED = "%[a-fA-F\\d]{2}"
UNRESERVED = "\\-_.!~*'()a-zA-Z\\d"
USERINFO = "(?:[" + UNRESERVED + ";:&=+$,]|" + ESCAPED + ")*"
DOMLABEL = "(?:[a-zA-Z\\d](?:[-a-zA-Z\\d]*[a-zA-Z\\d])?)"
TOPLABEL = "(?:[a-zA-Z](?:[-a-zA-Z\\d]*[a-zA-Z\\d])?)"
HOSTNAME = "(?:" + DOMLABEL + "\\.)*" + TOPLABEL + "\\.?"
IPV4ADDR = "\\d{1,3}\\.\\d{1,3}\\.\\d{1,3}\\.\\d{1,3}"
IPV6REF = "\\[[a-fA-F\\d:.]+\\]"
HOST = "(?:" + HOSTNAME + "|" + IPV4ADDR + "|" + IPV6REF + ")"
PORT = "\\d*"

#   mailbox characters of a mailto-style "to" component: anything but
#   the separators reserved in the query part, or an escape.
MAILBOX_PATTERN = "(?:" + ESCAPED + "|[^(),%?=&])"
