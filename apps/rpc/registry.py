"""
Procedure registry for the RPC router.

Each app declares its procedures in ``views.py`` with the ``query`` and
``mutation`` decorators; the registry maps dotted procedure names such as
``prescriptions.fill_item`` to the handler, its input serializer and the
permission classes that guard it.
"""
from django.core.exceptions import ImproperlyConfigured

QUERY = "query"
MUTATION = "mutation"


class Procedure:
    """A named handler plus the metadata the router needs to call it."""

    def __init__(self, name, handler, kind, input_serializer=None, permission_classes=None):
        self.name = name
        self.handler = handler
        self.kind = kind
        self.input_serializer = input_serializer
        self.permission_classes = permission_classes

    @property
    def http_method(self):
        return "GET" if self.kind == QUERY else "POST"

    def __repr__(self):
        return f"<Procedure {self.name} ({self.kind})>"


_procedures = {}


def register(name, handler, kind, input_serializer=None, permission_classes=None):
    if name in _procedures:
        raise ImproperlyConfigured(f"Procedure '{name}' is already registered.")
    procedure = Procedure(
        name=name,
        handler=handler,
        kind=kind,
        input_serializer=input_serializer,
        permission_classes=permission_classes,
    )
    _procedures[name] = procedure
    return procedure


def query(name, input_serializer=None, permission_classes=None):
    """Register a read-only procedure, served on GET."""
    def decorator(func):
        register(name, func, QUERY, input_serializer, permission_classes)
        return func
    return decorator


def mutation(name, input_serializer=None, permission_classes=None):
    """Register a state-changing procedure, served on POST."""
    def decorator(func):
        register(name, func, MUTATION, input_serializer, permission_classes)
        return func
    return decorator


def get_procedure(name):
    return _procedures.get(name)


def procedure_names():
    return sorted(_procedures)
