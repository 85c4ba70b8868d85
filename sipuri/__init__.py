import sys
import logging
import re

assert sys.version_info >= (3,7)

class Logger(logging.Logger):
    def __init__(self, name):
        super().__init__(name)
    def logandraise(self, exception):
        self.error(str(exception))
        exception.logged = True
        raise exception from None
logging.setLoggerClass(Logger)

def excepthook(type, value, traceback):
    if getattr(value, 'logged', False):
        return
    sys.__excepthook__(type, value, traceback)
sys.excepthook = excepthook

class ColoredFormatter(logging.Formatter):
    URI_RE = re.compile('''(?P<uri>sips?:[^\\s'"<>]+)''', re.IGNORECASE)
    default_time_format = "%H:%M:%S"
    escapecodes = {'CRITICAL':('2;91;41','97'),
                   'ERROR':('2;91','2;91'),
                   'WARNING':('22;93','97'),
                   'INFO':('2;96','97'),
                   'DEBUG':('2;94','97')
                   }
    def format(self, record):
        record.indentedmessage = self.indentmessage(logging.LogRecord.getMessage(record))
        record.color1,record.color2 = ColoredFormatter.escapecodes[record.levelname]
        return logging.Formatter.format(self, record)
    def indentmessage(self, message):
        lines = ColoredFormatter.URI_RE.sub('\x1b[92m\\g<uri>\x1b[m', message).splitlines()
        return '\n   '.join(lines)


# Module internal loggers
LOGLEVELS = (('URI', 'WARNING'),
             ('SIP', 'WARNING'))
loghandler = logging.StreamHandler(sys.stdout)
logformatter = ColoredFormatter("\x1b[2;37m%(asctime)s \x1b[%(color1)sm%(levelname)-8s\x1b[m \x1b[4m%(name)s\x1b[m \x1b[%(color2)sm%(indentedmessage)s\x1b[m")
loghandler.setFormatter(logformatter)
loggers = {}
for submodule,level in LOGLEVELS:
    log = logging.getLogger(submodule)
    log.setLevel(level)
    log.addHandler(loghandler)
    loggers[submodule] = log

def setloglevel(submodule, level):
    if submodule not in loggers:
        raise KeyError("unknown logger {!r}. Possible values are {}".format(submodule, list(loggers)))
    loggers[submodule].setLevel(level)


from .URIBNF import URIError, InvalidURIError, InvalidComponentError, UnrecognizedOpaquePartError, BadURIError
from .Utils import ParameterDict, HeaderInput, Pairs, Map, Raw
from .Generic import Generic
from .SIP import SIP
from .URIParser import URIParser, SchemeRegistry

registry = SchemeRegistry(default=Generic)
registry.register('SIP', SIP)
parser = URIParser(registry)

def parse(uri):
    return parser.parse(uri)

def build(args):
    return SIP.build(args)
