"""
RPC view and built-in procedures.

A single view serves every registered procedure: queries on GET with the
input JSON-encoded in the ``input`` query parameter, mutations on POST with
the input as the JSON body.
"""
import json

from django.utils import timezone
from rest_framework.exceptions import MethodNotAllowed, ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import APIView

from .exceptions import ProcedureNotFound, rpc_exception_handler
from .registry import QUERY, get_procedure, query


class ProcedureView(APIView):
    """
    Dispatch ``/rpc/<name>`` to the registered procedure.

    Permission classes come from the procedure; procedures that declare none
    fall back to the project defaults.
    """

    def initial(self, request, *args, **kwargs):
        self.procedure_name = kwargs.get("name")
        self.procedure = get_procedure(self.procedure_name)
        if self.procedure is None:
            raise ProcedureNotFound(self.procedure_name)
        super().initial(request, *args, **kwargs)

    def get_permissions(self):
        procedure = getattr(self, "procedure", None)
        if procedure is not None and procedure.permission_classes is not None:
            return [permission() for permission in procedure.permission_classes]
        return [permission() for permission in api_settings.DEFAULT_PERMISSION_CLASSES]

    def get_exception_handler(self):
        return rpc_exception_handler

    def _read_input(self, request):
        if self.procedure.kind == QUERY:
            raw = request.query_params.get("input")
            if not raw:
                return {}
            try:
                return json.loads(raw)
            except ValueError:
                raise ParseError("Query input must be valid JSON.")
        return request.data if request.data is not None else {}

    def _call(self, request):
        data = None
        if self.procedure.input_serializer is not None:
            serializer = self.procedure.input_serializer(
                data=self._read_input(request),
                context={"request": request},
            )
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
        result = self.procedure.handler(request, data)
        return Response({"result": {"data": result}})

    def get(self, request, *args, **kwargs):
        if self.procedure.kind != QUERY:
            raise MethodNotAllowed(request.method, detail=f"'{self.procedure.name}' is a mutation; use POST.")
        return self._call(request)

    def post(self, request, *args, **kwargs):
        if self.procedure.kind == QUERY:
            raise MethodNotAllowed(request.method, detail=f"'{self.procedure.name}' is a query; use GET.")
        return self._call(request)


@query("healthcheck", permission_classes=[AllowAny])
def healthcheck(request, data):
    return {"status": "ok", "timestamp": timezone.now().isoformat()}
