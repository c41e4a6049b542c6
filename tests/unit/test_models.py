"""
Tests for Product, operation and envelope models.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from product_catalog.exceptions import ValidationError
from product_catalog.models import (
    MUTATIONS,
    InboundEvent,
    Operation,
    OperationRequest,
    OperationResponse,
    Product,
    ProductPage,
)
from product_catalog.utils import from_dynamodb_types, to_dynamodb_types, to_json_safe


class TestProduct:
    """Test Product model and DynamoDB conversion."""

    def test_extra_attributes_are_kept(self, sample_product_data):
        product = Product(**sample_product_data)

        assert product.id == "p1"
        assert product.category == "tools"
        assert product.model_dump()["name"] == "Claw Hammer"
        assert product.model_dump()["tags"] == ["steel", "hand-tool"]

    def test_category_is_optional(self):
        product = Product(id="p5", name="Gift Card")

        assert product.category is None
        assert "category" not in product.to_dynamodb_item()

    def test_empty_id_rejected(self):
        with pytest.raises(PydanticValidationError):
            Product(id="")

    def test_to_dynamodb_item(self, sample_product_data):
        """Test floats become Decimal and other values pass through."""
        item = Product(**sample_product_data).to_dynamodb_item()

        assert item["price"] == Decimal("12.5")
        assert isinstance(item["price"], Decimal)
        assert item["stock"] == 40
        assert item["discontinued"] is False
        assert item["tags"] == ["steel", "hand-tool"]

    def test_from_dynamodb_item(self):
        """Test Decimals come back as int or float."""
        product = Product.from_dynamodb_item({
            "id": "p1",
            "category": "tools",
            "price": Decimal("12.5"),
            "stock": Decimal("40"),
        })

        data = product.model_dump()
        assert data["price"] == 12.5
        assert isinstance(data["price"], float)
        assert data["stock"] == 40
        assert isinstance(data["stock"], int)

    def test_from_dynamodb_item_without_id(self):
        with pytest.raises(ValidationError, match="Failed to convert DynamoDB item to Product"):
            Product.from_dynamodb_item({"category": "tools"})

    def test_meta_key_layout(self):
        assert Product.Meta.partition_key == "id"
        assert Product.Meta.gsis[0]["partition_key"] == "category"


class TestProductPage:

    def test_has_more(self):
        assert ProductPage(items=[], next_token="abc").has_more is True
        assert ProductPage(items=[]).has_more is False


class TestOperation:
    """Test operation names and lookup."""

    def test_wire_names(self):
        assert {operation.value for operation in Operation} == {
            "getProductById",
            "listProducts",
            "listProductsPage",
            "productsByCategory",
            "createProduct",
            "updateProduct",
            "deleteProduct",
        }

    @pytest.mark.parametrize("name", ["getProductByName", "", None, "GETPRODUCTBYID"])
    def test_lookup_unknown(self, name):
        assert Operation.lookup(name) is None

    def test_lookup_known(self):
        assert Operation.lookup("productsByCategory") is Operation.PRODUCTS_BY_CATEGORY

    def test_mutations(self):
        assert Operation.CREATE_PRODUCT.is_mutation
        assert Operation.DELETE_PRODUCT.is_mutation
        assert not Operation.LIST_PRODUCTS.is_mutation
        assert len(MUTATIONS) == 3


class TestInboundEvent:
    """Test both inbound event forms."""

    def test_direct_form(self):
        event = InboundEvent.model_validate({"field": "listProducts", "arguments": {}})

        assert event.operation_name == "listProducts"

    def test_appsync_form(self):
        event = InboundEvent.model_validate({
            "info": {"fieldName": "getProductById", "parentTypeName": "Query"},
            "arguments": {"productId": "p1"},
            "request": {"headers": {"x-request-id": "abc"}},
            "identity": {"username": "alice"},
        })

        assert event.operation_name == "getProductById"
        assert event.headers == {"x-request-id": "abc"}
        assert event.identity == {"username": "alice"}

    def test_field_wins_over_info(self):
        event = InboundEvent.model_validate({"field": "listProducts", "info": {"fieldName": "deleteProduct"}})

        assert event.operation_name == "listProducts"

    def test_null_sections(self):
        event = InboundEvent.model_validate({"field": "listProducts", "arguments": None, "request": None, "info": None})

        assert event.arguments == {}
        assert event.headers == {}

    def test_no_operation_name(self):
        assert InboundEvent.model_validate({}).operation_name is None

    def test_request_from_event(self):
        event = InboundEvent.model_validate({
            "field": "deleteProduct",
            "arguments": {"productId": "p1"},
            "request": {"headers": {"X-Request-Id": "abc"}},
        })

        request = OperationRequest.from_event(Operation.DELETE_PRODUCT, event, request_id="req-1")

        assert request.operation is Operation.DELETE_PRODUCT
        assert request.arguments == {"productId": "p1"}
        assert request.headers == {"X-Request-Id": "abc"}
        assert request.request_id == "req-1"
        assert request.context == {}


class TestOperationResponse:

    def test_failed(self):
        assert OperationResponse(result=1).failed is False
        assert OperationResponse(error=RuntimeError("boom")).failed is True


class TestTypeConversion:
    """Test conversion helpers at the store and response boundaries."""

    def test_to_dynamodb_types_nested(self):
        converted = to_dynamodb_types({"dims": {"w": 1.5, "h": None}, "sizes": [0.5, 2]})

        assert converted == {"dims": {"w": Decimal("1.5")}, "sizes": [Decimal("0.5"), 2]}

    def test_from_dynamodb_types_sets(self):
        converted = from_dynamodb_types({"tags": {"a"}, "n": Decimal("2.0")})

        assert converted == {"tags": ["a"], "n": 2}

    def test_to_json_safe_product(self):
        product = Product.from_dynamodb_item({"id": "p1", "price": Decimal("9.99")})

        assert to_json_safe(product) == {"id": "p1", "price": 9.99}

    def test_to_json_safe_passthrough(self):
        assert to_json_safe(None) is None
        assert to_json_safe("p1") == "p1"
        assert to_json_safe([Product(id="p1", category="tools")]) == [{"id": "p1", "category": "tools"}]
