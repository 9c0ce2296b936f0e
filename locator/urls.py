from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r"locators", views.LocatorViewSet, basename="locator")

urlpatterns = [
    path("locators/<slug:slug>/xml.xml", views.location_xml, name="locator-xml"),
    path("", include(router.urls)),
]
