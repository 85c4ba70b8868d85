#coding: utf-8

import re
import logging
log = logging.getLogger('SIP')

from . import URIBNF
from . import Utils
from .Generic import Generic
from .URIBNF import InvalidComponentError, UnrecognizedOpaquePartError


#   RFC 3261, The sip URL scheme
#
#   "hname" and "hvalue" are encodings of an RFC 3261 header name and
#   value, respectively. All URL reserved characters must be encoded.
#   Within sip URLs, the characters "?", "=", "&" are reserved.
#
#   hname      =  *urlc
#   hvalue     =  *urlc
#   header     =  hname "=" hvalue
HEADER_PATTERN = "(?:[^?=&]*=[^?=&]*)"
HEADER_REGEXP = re.compile(HEADER_PATTERN)
#   pname      =  *urlc
#   pvalue     =  *urlc
#   parameter  =  pname "=" pvalue
PARAMETER_PATTERN = "(?:[^?=&]*=[^?=&]*)"
PARAMETER_REGEXP = re.compile(PARAMETER_PATTERN)
#   The ";" separating two parameters is also a valid parameter character,
#   so the parameter list is matched as: up to the first "=", then for each
#   further "=" at least one ";" since the previous one. Same language as
#   parameter *( ";" parameter ), with a single way to split it.
PARAMETERS_PATTERN = "(?:[^?=&]*=(?:[^?=&;]*;[^?=&]*=)*[^?=&]*)"
#   port       =  ":" *digit
#   parameters =  ";" parameter *( ";" parameter )
#   headers    =  "?" header *( "&" header )
#   sipURL     =  "sip:" [ [ user "@" ] host [ port ] ] [ parameters ] [ headers ]
SIP_REGEXP = re.compile(r"""
    \A
    (?:
      (?:(?P<user>""" + URIBNF.USERINFO + r""")@)?
      (?P<host>""" + URIBNF.HOST + r""")
      (?::(?P<port>""" + URIBNF.PORT + r"""))?
    )?
    (?:;(?P<parameters>""" + PARAMETERS_PATTERN + r"""))?
    (?:\?(?P<headers>""" + HEADER_PATTERN + r"(?:&" + HEADER_PATTERN + r""")*))?
    \Z
    """, re.VERBOSE)

TO_REGEXP = re.compile(r"\A" + URIBNF.MAILBOX_PATTERN + r"+\Z")
HEADERS_REGEXP = re.compile(r"\A" + HEADER_PATTERN + r"(?:&" + HEADER_PATTERN + r")*\Z")
PARAMETERS_REGEXP = re.compile(r"\A" + PARAMETERS_PATTERN + r"\Z")
USER_REGEXP = re.compile(r"\A" + URIBNF.USERINFO + r"\Z")
HOST_REGEXP = re.compile(r"\A" + URIBNF.HOST + r"\Z")
PORT_REGEXP = re.compile(r"\A" + URIBNF.PORT + r"\Z")


class SIP(Generic):
    """A sip: URI.

    The opaque body is the reference: every component is derived from it
    by one anchored match (SIP_REGEXP) and the two setters (to, headers)
    rebuild it and match it again. The "to" address is the
    [user@]host[:port] prefix of the body.
    """
    DEFAULT_PORT = None
    COMPONENT = ('scheme', 'user', 'host', 'port', 'parameters', 'headers')
    BUILD_COMPONENT = ('to', 'headers')

    @classmethod
    def build(cls, args):
        """Create a SIP URI from components, with syntax checking.

        Components are either a list [to, headers] or a mapping with keys
        among to, headers, user, host, port, parameters and fragment.

        The headers (and the parameters) can be supplied as a pre-encoded
        string such as "subject=hello&priority=urgent", as a list of pairs
        like [['subject', 'hello'], ['to', 'bob@example.com']] or as a
        mapping.

           >>> str(SIP.build(['alice@example.com', [['subject', 'hello']]]))
           'sip:alice@example.com?subject=hello'
           >>> str(SIP.build({'user': 'bob', 'host': 'biloxi.com', 'port': 5060,
           ...                'parameters': {'transport': 'tcp'}}))
           'sip:bob@biloxi.com:5060;transport=tcp'
        """
        tmp = Utils.makecomponents(cls, args)

        given = [k for k in ('user', 'host', 'port') if tmp.get(k) is not None]
        if tmp.get('to') is not None and given:
            raise ValueError("'to' is the whole [user@]host[:port] address and cannot be combined with {}".format(', '.join(given)))

        if tmp.get('to'):
            opaque = str(tmp['to'])
        elif tmp.get('host'):
            opaque = str(tmp['host'])
            if tmp.get('user') is not None:
                opaque = '{}@{}'.format(tmp['user'], opaque)
            if tmp.get('port') is not None:
                opaque = '{}:{}'.format(opaque, tmp['port'])
        else:
            opaque = ''

        parameters = Utils.HeaderInput.wrap(tmp.get('parameters'))
        if parameters:
            opaque += ';' + parameters.encode(';')

        headers = Utils.HeaderInput.wrap(tmp.get('headers'))
        if headers:
            opaque += '?' + headers.encode('&')

        return super().build({'scheme': 'sip', 'opaque': opaque, 'fragment': tmp.get('fragment')})

    def __init__(self, scheme='sip', opaque=None, fragment=None, parser=None, arg_check=False):
        if scheme is not None and scheme.lower() != 'sip':
            log.logandraise(InvalidComponentError('scheme', scheme))
        super().__init__('sip', opaque, fragment, parser, arg_check)
        self._headers = []
        self._decompose(self._opaque or '')

    def _decompose(self, opaque):
        m = SIP_REGEXP.match(opaque)
        if m is None:
            log.logandraise(UnrecognizedOpaquePartError(opaque))

        user, host, port, parameters, headers = m.group('user', 'host', 'port', 'parameters', 'headers')
        self._check_user(user)
        self._check_host(host)
        self._check_port(port)
        self._check_parameters(parameters)
        self._check_headers(headers)

        # nothing is stored before every component passed its check
        if host is None:
            self._to = ''
        else:
            self._to = opaque[:m.end('port') if port is not None else m.end('host')]
        self._user = user
        self._host = host
        self._port = int(port) if port else None
        self._parameters = parameters
        self._set_headers(headers)
        self._opaque = opaque

    @staticmethod
    def _compose(to, parameters, headers):
        return '{}{}{}'.format(to,
                               ';' + parameters if parameters else '',
                               '?' + headers if headers else '')

    def _check_to(self, v):
        if not v:
            return
        if not self.parser.grammar['OPAQUE'].matches(v) or not TO_REGEXP.match(v):
            log.logandraise(InvalidComponentError('to', v))

    def _check_user(self, v):
        if v is not None and not USER_REGEXP.match(v):
            log.logandraise(InvalidComponentError('user', v))

    def _check_host(self, v):
        if v is not None and not HOST_REGEXP.match(v):
            log.logandraise(InvalidComponentError('host', v))

    def _check_port(self, v):
        if v is not None and not PORT_REGEXP.match(v):
            log.logandraise(InvalidComponentError('port', v))

    def _check_parameters(self, v):
        if v is not None and not PARAMETERS_REGEXP.match(v):
            log.logandraise(InvalidComponentError('parameters', v))

    def _check_headers(self, v):
        if not v:
            return
        if not self.parser.grammar['OPAQUE'].matches(v) or not HEADERS_REGEXP.match(v):
            log.logandraise(InvalidComponentError('headers', v))

    def _set_headers(self, v):
        self._headers = []
        if v:
            for x in HEADER_REGEXP.findall(v):
                self._headers.append(tuple(x.split('=', 1)))

    def _headerstring(self):
        return '&'.join('='.join(x) for x in self._headers)

    # The primary address of the URI, as a str
    @property
    def to(self):
        return self._to
    @to.setter
    def to(self, v):
        self._check_to(v)
        self._decompose(self._compose(v or '', self._parameters, self._headerstring()))

    # URI headers, as a list of (name, value) still escaped, as they appear
    # in the URI text. See decoded_headers for the percent-decoded form.
    @property
    def headers(self):
        return list(self._headers)
    @headers.setter
    def headers(self, v):
        headers = Utils.HeaderInput.wrap(v)
        encoded = headers.encode('&') if headers else ''
        self._check_headers(encoded)
        self._decompose(self._compose(self._to, self._parameters, encoded))

    @property
    def decoded_headers(self):
        unescape = self.parser.unescape
        return [(unescape(name), unescape(value)) for name,value in self._headers]

    @property
    def user(self):
        return self._user

    @property
    def host(self):
        return self._host

    @property
    def port(self):
        return self._port

    @property
    def parameters(self):
        return self._parameters

    @property
    def params(self):
        return Utils.ParameterDict.fromstring(self._parameters, ';')

    def to_s(self):
        return '{}:{}{}{}{}'.format(self._scheme,
                                    self._to,
                                    ';' + self._parameters if self._parameters else '',
                                    '?' + self._headerstring() if self._headers else '',
                                    '#' + self._fragment if self._fragment is not None else '')

    def to_mailtext(self):
        """Return the RFC822 e-mail text equivalent of the URI.

           >>> SIP.build(['alice@example.com', 'subject=hello&cc=bob']).to_mailtext()
           'To: alice@example.com\\nSubject: hello\\nCc: bob\\n\\n\\n'
        """
        unescape = self.parser.unescape
        to = unescape(self._to)
        head = ''
        body = ''
        for name,value in self.decoded_headers:
            if name == 'body':
                body = value
            elif name == 'to':
                to += ', ' + value
            else:
                head += name.capitalize() + ': ' + value + '\n'
        return "To: {}\n{}\n{}\n".format(to, head, body)
    to_rfc822text = to_mailtext
