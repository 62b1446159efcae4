from .config import config
from .generate import generate
from .init import init
from .inspect import inspect
from .list_templates import list_templates
from .log import log
from .version import version
