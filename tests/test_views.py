"""Tests for building proxy class views."""

from rpc_sdkgen.core.ast import (
    ClassDefinition,
    CustomNodeLiteral,
    EnumCase,
    EnumDeclaration,
    IntegerLiteral,
    MethodDefinition,
    NodeType,
    PromiseType,
    StringLiteral,
    VoidLiteral,
)
from rpc_sdkgen.core.config import ClassConfiguration, MethodConfiguration, TriggerType
from rpc_sdkgen.core.views import ArgumentView, ClassCodeGenerator, mark_last
from rpc_sdkgen.languages.python import PythonGenerator
from rpc_sdkgen.languages.python.naming import create_python_guard
from rpc_sdkgen.languages.python.types import PythonTypeMapper
from rpc_sdkgen.languages.typescript import TypeScriptGenerator
from rpc_sdkgen.languages.typescript.naming import create_typescript_guard
from rpc_sdkgen.languages.typescript.types import TypeScriptTypeMapper


def typescript_builder(class_definition, configuration, channel=TriggerType.JSONRPC, add_comments=True):
    return ClassCodeGenerator(
        class_definition,
        configuration,
        channel,
        TypeScriptTypeMapper(),
        create_typescript_guard(),
        TypeScriptGenerator().format_parameters,
        add_comments=add_comments,
    )


class TestQualifyingMethods:
    def test_filters_by_channel(self, user_program, user_configuration):
        builder = typescript_builder(user_program.class_definition(), user_configuration)
        assert [m.name for m in builder.qualifying_methods()] == ["create"]

    def test_http_channel(self, user_program, user_configuration):
        builder = typescript_builder(user_program.class_definition(), user_configuration, TriggerType.HTTP)
        assert [m.name for m in builder.qualifying_methods()] == ["internalMethod"]

    def test_methods_inherit_class_trigger(self, user_program):
        configuration = ClassConfiguration(path="user.ts", type=TriggerType.CRON)
        builder = typescript_builder(user_program.class_definition(), configuration)
        assert builder.qualifying_methods() == []
        assert builder.build_view("user.sdk.ts", "url") is None

    def test_declaration_order_is_kept(self, make_param):
        cls = ClassDefinition(
            "Calc",
            methods=(
                MethodDefinition("sub", return_type=IntegerLiteral()),
                MethodDefinition("add", return_type=IntegerLiteral()),
                MethodDefinition("mul", return_type=IntegerLiteral()),
            ),
        )
        view = typescript_builder(cls, ClassConfiguration(path="calc.ts")).build_view("calc.sdk.ts", "u")
        assert [m.name for m in view.methods] == ["sub", "add", "mul"]
        assert [m.last for m in view.methods] == [False, False, True]

    def test_signature_types(self, user_program, user_configuration):
        builder = typescript_builder(user_program.class_definition(), user_configuration)
        types = builder.signature_types(builder.qualifying_methods())
        assert types == [StringLiteral(), StringLiteral(), StringLiteral(), PromiseType(StringLiteral())]


class TestBuildMethod:
    def test_user_create(self, user_program, user_configuration):
        builder = typescript_builder(user_program.class_definition(), user_configuration)
        view = builder.build_view("user.sdk.ts", "%%%link_to_be_replace%%%")

        assert view.class_name == "User"
        assert view.file_path == "user.sdk.ts"

        create = view.methods[0]
        assert create.qualified_name == "User.create"
        assert create.caller == '"User.create"'
        assert create.return_type == "Promise<string>"
        assert [p.declaration for p in create.parameters] == ["name: string", "email: string", "password: string"]
        assert [a.name for a in create.arguments] == ["name", "email", "password"]
        assert [a.last for a in create.arguments] == [False, False, True]

    def test_reserved_parameter_names(self, make_param):
        cls = ClassDefinition(
            "Api",
            methods=(MethodDefinition("send", params=(make_param("function"), make_param("data"))),),
        )
        view = typescript_builder(cls, ClassConfiguration(path="api.ts")).build_view("api.sdk.ts", "u")
        method = view.methods[0]
        assert [p.name for p in method.parameters] == ["function_", "data"]
        assert [a.name for a in method.arguments] == ["function_", "data"]

    def test_sanitized_parameter_names_stay_distinct(self, make_param):
        cls = ClassDefinition(
            "Api",
            methods=(MethodDefinition("send", params=(make_param("class"), make_param("class_"))),),
        )
        method = typescript_builder(cls, ClassConfiguration(path="api.ts")).build_view("api.sdk.ts", "u").methods[0]

        assert [p.name for p in method.parameters] == ["class_", "class__"]
        assert [p.declaration for p in method.parameters] == ["class_: string", "class__: string"]

    def test_defaults_and_optionals(self, make_param):
        cls = ClassDefinition(
            "Api",
            methods=(
                MethodDefinition(
                    "find",
                    params=(
                        make_param("query"),
                        make_param("limit", IntegerLiteral(), default="10", default_kind=NodeType.INTEGER),
                        make_param("cursor", optional=True),
                    ),
                ),
            ),
        )
        method = typescript_builder(cls, ClassConfiguration(path="api.ts")).build_view("api.sdk.ts", "u").methods[0]
        assert [p.declaration for p in method.parameters] == [
            "query: string",
            "limit: number = 10",
            "cursor?: string",
        ]
        assert method.parameters[1].default == "10"
        assert method.return_type == ""

    def test_python_method_names_are_guarded(self, make_param):
        cls = ClassDefinition(
            "Flow",
            methods=(MethodDefinition("import", params=(make_param("from"),), return_type=VoidLiteral()),),
        )
        builder = ClassCodeGenerator(
            cls,
            ClassConfiguration(path="flow.ts"),
            TriggerType.JSONRPC,
            PythonTypeMapper(),
            create_python_guard(),
            PythonGenerator().format_parameters,
            sanitize_method_names=True,
        )
        method = builder.build_view("flow_sdk.py", "u").methods[0]
        assert method.name == "import_"
        assert method.qualified_name == "Flow.import"
        assert method.caller == '"Flow.import"'
        assert method.parameters[0].declaration == "from_: str"

    def test_doc_strings_follow_add_comments(self):
        cls = ClassDefinition("Doc", methods=(MethodDefinition("ping", doc_string="Ping it."),), doc_string="Docs.")
        configuration = ClassConfiguration(path="doc.ts")

        with_comments = typescript_builder(cls, configuration).build_view("doc.sdk.ts", "u")
        assert with_comments.doc_string == "Docs."
        assert with_comments.methods[0].doc_string == "Ping it."

        without = typescript_builder(cls, configuration, add_comments=False).build_view("doc.sdk.ts", "u")
        assert without.doc_string is None
        assert without.methods[0].doc_string is None


    def test_result_decoder(self, make_param):
        status = EnumDeclaration("Status", (EnumCase("On", "on"),))
        cls = ClassDefinition(
            "Lamp",
            methods=(
                MethodDefinition("state", return_type=PromiseType(status)),
                MethodDefinition("check", params=(make_param("result"),), return_type=CustomNodeLiteral("Status")),
                MethodDefinition("name", return_type=StringLiteral()),
            ),
        )
        mapper = PythonTypeMapper()
        mapper.register_declarations([status])
        builder = ClassCodeGenerator(
            cls,
            ClassConfiguration(path="lamp.ts"),
            TriggerType.JSONRPC,
            mapper,
            create_python_guard(),
            PythonGenerator().format_parameters,
        )
        state, check, name = builder.build_view("lamp_sdk.py", "u").methods

        assert (state.result_name, state.decoder) == ("result", "Status(result)")
        assert (check.result_name, check.decoder) == ("result_", "Status(result_)")
        assert name.decoder is None

def test_method_override_channel():
    configuration = ClassConfiguration(
        path="x.ts", type=TriggerType.HTTP, methods=(MethodConfiguration("rpc", TriggerType.JSONRPC),)
    )
    assert configuration.get_method_type("rpc") == TriggerType.JSONRPC
    assert configuration.get_method_type("other") == TriggerType.HTTP


def test_mark_last():
    items = [ArgumentView("a", last=True), ArgumentView("b")]
    mark_last(items)
    assert [i.last for i in items] == [False, True]
    assert mark_last([]) == []
