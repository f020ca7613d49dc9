from dataclasses import dataclass
from typing import Annotated

from django.db import models


@dataclass(frozen=True)
class Label:
    text: str


class Named(models.Model):
    name: Annotated[str, Label("Name")] = models.CharField(max_length=100)

    class Meta:
        abstract = True
        app_label = "test_app"


class Category(Named):
    class Meta:
        app_label = "test_app"
        verbose_name_plural = "categories"


class Tag(models.Model):
    label = models.CharField(max_length=50)

    class Meta:
        app_label = "test_app"


class Product(Named):
    price: Annotated[object, Label("Price")] = models.DecimalField(
        max_digits=10, decimal_places=2
    )
    category = models.ForeignKey(
        Category, null=True, on_delete=models.CASCADE, related_name="products"
    )
    specs = models.JSONField(default=dict, blank=True)
    tags = models.ManyToManyField(Tag, blank=True, related_name="products")

    class Meta:
        app_label = "test_app"


class DiscountedProduct(Product):
    discount = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "test_app"
