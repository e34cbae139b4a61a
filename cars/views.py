# cars/views.py
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .catalog import CarCatalogError, fetch_catalog, list_brands


class CarModelsView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        description="Full car brand/model catalog proxied from the external provider.",
        summary="Car Models",
        tags=["Cars"],
    )
    def get(self, request):
        try:
            return Response(fetch_catalog())
        except CarCatalogError as e:
            return Response(
                {"error": str(e)}, status=status.HTTP_502_BAD_GATEWAY
            )


class CarBrandsView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        description="Brands known to the bundled catalog, without their models.",
        summary="Car Brands",
        tags=["Cars"],
    )
    def get(self, request):
        return Response(list_brands())
