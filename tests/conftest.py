"""Shared fixtures for the rpc_sdkgen test suite."""

import pytest

from rpc_sdkgen.core.ast import (
    ArrayType,
    ClassDefinition,
    CustomNodeLiteral,
    DefaultValue,
    EnumCase,
    EnumDeclaration,
    IntegerLiteral,
    MethodDefinition,
    NodeType,
    ParameterDefinition,
    Program,
    PromiseType,
    PropertyDefinition,
    StringLiteral,
    StructLiteral,
    TypeLiteral,
    VoidLiteral,
)
from rpc_sdkgen.core.config import ClassConfiguration, MethodConfiguration, TriggerType
from rpc_sdkgen.core.generator import ClassInfo, SdkGeneratorInput


def param(name, type_node=None, optional=False, default=None, default_kind=NodeType.STRING):
    """Build a ParameterDefinition with an optional default value."""
    default_value = DefaultValue(default, default_kind) if default is not None else None
    return ParameterDefinition(name, type_node or StringLiteral(), optional, default_value)


@pytest.fixture
def make_param():
    return param


@pytest.fixture
def user_program():
    """User class: create is exposed over JSON-RPC, internalMethod over HTTP."""
    user = ClassDefinition(
        name="User",
        methods=(
            MethodDefinition(
                name="create",
                params=(param("name"), param("email"), param("password")),
                return_type=PromiseType(StringLiteral()),
            ),
            MethodDefinition(name="internalMethod", return_type=VoidLiteral()),
        ),
    )
    return Program(original_language="ts", body=(user,))


@pytest.fixture
def user_configuration():
    return ClassConfiguration(
        path="user.ts",
        type=TriggerType.JSONRPC,
        methods=(MethodConfiguration("internalMethod", TriggerType.HTTP),),
    )


@pytest.fixture
def user_input(user_program, user_configuration):
    def build(language):
        return SdkGeneratorInput(
            classes_info=[ClassInfo(user_program, user_configuration, "user.ts")],
            language=language,
        )

    return build


@pytest.fixture
def cross_file_program():
    """Bar in api/Bar uses Foo from models/foo, which uses Status from models/status."""
    status = EnumDeclaration(
        name="Status",
        cases=(EnumCase("Active", "active"), EnumCase("Inactive", "inactive")),
        home_path="models/status",
    )
    foo = StructLiteral(
        name="Foo",
        type_literal=TypeLiteral(
            (
                PropertyDefinition("id", IntegerLiteral()),
                PropertyDefinition("status", CustomNodeLiteral("Status")),
                PropertyDefinition("tags", ArrayType(StringLiteral()), optional=True),
            )
        ),
        home_path="models/foo",
    )
    page = StructLiteral(
        name="Page",
        type_literal=TypeLiteral((PropertyDefinition("items", ArrayType(CustomNodeLiteral("Foo"))),)),
        home_path="api/Bar",
    )
    unused = StructLiteral(
        name="Unused",
        type_literal=TypeLiteral((PropertyDefinition("x", StringLiteral()),)),
        home_path="models/unused",
    )
    bar = ClassDefinition(
        name="Bar",
        methods=(
            MethodDefinition(
                name="getFoo",
                params=(param("id", IntegerLiteral()),),
                return_type=CustomNodeLiteral("Foo"),
            ),
            MethodDefinition(name="list", return_type=CustomNodeLiteral("Page")),
        ),
    )
    return Program(original_language="ts", body=(bar, status, foo, page, unused))


@pytest.fixture
def cross_file_input(cross_file_program):
    def build(language):
        return SdkGeneratorInput(
            classes_info=[ClassInfo(cross_file_program, ClassConfiguration(path="api/Bar.ts"), "Bar.ts")],
            language=language,
        )

    return build
