"""
Procedure views for medicines app.

Handles medicine CRUD, search, low-stock lookups and stock corrections.
"""
from django.conf import settings

from apps.accounts.permissions import IsAdminRole
from apps.common.serializers import IdInputSerializer, SearchInputSerializer, ThresholdInputSerializer
from apps.rpc.registry import mutation, query
from .serializers import MedicineSerializer, MedicineUpdateInputSerializer, StockUpdateInputSerializer
from .services import MedicineService


@mutation("medicines.create", input_serializer=MedicineSerializer, permission_classes=[IsAdminRole])
def create_medicine(request, data):
    medicine = MedicineService.create_medicine(**data)
    return MedicineSerializer(medicine).data


@query("medicines.get_all")
def get_medicines(request, data):
    return MedicineSerializer(MedicineService.get_medicines(), many=True).data


@query("medicines.get_by_id", input_serializer=IdInputSerializer)
def get_medicine_by_id(request, data):
    medicine = MedicineService.get_medicine(data["id"])
    return MedicineSerializer(medicine).data if medicine else None


@mutation("medicines.update", input_serializer=MedicineUpdateInputSerializer, permission_classes=[IsAdminRole])
def update_medicine(request, data):
    fields = dict(data)
    medicine_id = fields.pop("id")
    medicine = MedicineService.update_medicine(medicine_id, **fields)
    return MedicineSerializer(medicine).data


@query("medicines.get_low_stock", input_serializer=ThresholdInputSerializer)
def get_low_stock(request, data):
    threshold = data.get("threshold", settings.LOW_STOCK_THRESHOLD)
    return MedicineSerializer(MedicineService.get_low_stock_medicines(threshold), many=True).data


@query("medicines.search", input_serializer=SearchInputSerializer)
def search_medicines(request, data):
    return MedicineSerializer(MedicineService.search_medicines(data["query"]), many=True).data


@mutation("medicines.update_stock", input_serializer=StockUpdateInputSerializer, permission_classes=[IsAdminRole])
def update_stock(request, data):
    medicine = MedicineService.set_stock(data["id"], data["quantity"])
    return MedicineSerializer(medicine).data
