"""Java AST parser using tree-sitter.

Walks the tree-sitter AST to extract the package, imports, and every class
and interface declaration (including nested and local ones) together with
their fields, methods and extends/implements clauses.
"""

import logging
import re
from typing import Iterator, List, Optional

import tree_sitter
import tree_sitter_java

from .base import BaseLanguageParser
from .models import (
    FieldGroup,
    FieldMember,
    ImportDeclaration,
    MethodMember,
    Parameter,
    TypeDeclaration,
    TypeKind,
    TypeReference,
    Visibility,
)

logger = logging.getLogger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = {
    "class_declaration": TypeKind.CLASS,
    "interface_declaration": TypeKind.INTERFACE,
}

_FIELD_NODES = ("field_declaration", "constant_declaration")

_VISIBILITY_MODIFIERS = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "protected": Visibility.PROTECTED,
}


class JavaParser(BaseLanguageParser):
    """tree-sitter based Java parser.

    Extracts:
    - Class declarations -> TypeKind.CLASS
    - Interface declarations -> TypeKind.INTERFACE
    - Fields (one member per declared variable) and methods; constructors,
      enums, records and annotation types are not part of the model
    - Package and import declarations
    """

    def get_language(self) -> str:
        return "java"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JAVA_LANGUAGE

    def extract_package(self, tree: tree_sitter.Tree, source: bytes) -> str:
        for child in tree.root_node.children:
            if child.type == "package_declaration":
                for sub in child.named_children:
                    if sub.type in ("identifier", "scoped_identifier"):
                        return _text(sub, source)
        return ""

    def extract_imports(self, tree: tree_sitter.Tree, source: bytes) -> List[ImportDeclaration]:
        imports: List[ImportDeclaration] = []
        for child in tree.root_node.children:
            if child.type != "import_declaration":
                continue
            name = None
            is_static = False
            is_asterisk = False
            for sub in child.children:
                if sub.type == "static":
                    is_static = True
                elif sub.type == "asterisk":
                    is_asterisk = True
                elif sub.type in ("identifier", "scoped_identifier"):
                    name = _text(sub, source)
            if name:
                imports.append(ImportDeclaration(name=name, is_static=is_static, is_asterisk=is_asterisk))
        return imports

    def extract_declarations(
        self, tree: tree_sitter.Tree, source: bytes, package_name: str
    ) -> List[TypeDeclaration]:
        declarations = []
        for node in _iter_type_nodes(tree.root_node):
            decl = self._extract_type(node, source, package_name)
            if decl:
                logger.debug("Parsed %s %s", decl.kind.value, decl.qualified_name)
                declarations.append(decl)
        return declarations

    # =========================================================================
    # Declaration extractors
    # =========================================================================

    def _extract_type(
        self, node: tree_sitter.Node, source: bytes, package_name: str
    ) -> Optional[TypeDeclaration]:
        name = _get_child_text(node, "name", source)
        if not name:
            return None

        kind = _TYPE_DECLARATIONS[node.type]
        qualified_name = f"{package_name}.{name}" if package_name else name
        decl = TypeDeclaration(name=name, qualified_name=qualified_name, kind=kind)

        if kind is TypeKind.CLASS:
            for child in node.children:
                if child.type == "superclass":
                    decl.extends.extend(_type_list(child, source))
                elif child.type == "super_interfaces":
                    decl.implements.extend(_type_list(child, source))
            body = _get_child_by_type(node, "class_body")
        else:
            for child in node.children:
                if child.type == "extends_interfaces":
                    decl.extends.extend(_type_list(child, source))
            body = _get_child_by_type(node, "interface_body")

        if body:
            for child in body.children:
                if child.type in _FIELD_NODES:
                    group = self._extract_field(child, source)
                    if group.members:
                        decl.field_groups.append(group)
                elif child.type == "method_declaration":
                    method = self._extract_method(child, source)
                    if method:
                        decl.methods.append(method)

        return decl

    def _extract_field(self, node: tree_sitter.Node, source: bytes) -> FieldGroup:
        visibility = _visibility(node)
        type_node = node.child_by_field_name("type")
        group = FieldGroup()
        if type_node is None:
            return group

        for declarator in node.children_by_field_name("declarator"):
            var_name = _get_child_text(declarator, "name", source)
            if not var_name:
                continue
            group.members.append(
                FieldMember(
                    visibility=visibility,
                    type=_declared_type(type_node, declarator, source),
                    name=var_name,
                )
            )
        return group

    def _extract_method(self, node: tree_sitter.Node, source: bytes) -> Optional[MethodMember]:
        name = _get_child_text(node, "name", source)
        type_node = node.child_by_field_name("type")
        if not name or type_node is None:
            return None

        method = MethodMember(
            visibility=_visibility(node),
            return_type=type_reference(type_node, source),
            name=name,
        )

        params = node.child_by_field_name("parameters")
        if params:
            for child in params.named_children:
                param = _extract_parameter(child, source)
                if param:
                    method.parameters.append(param)
        return method


# =============================================================================
# Type references
# =============================================================================

_SPACED_PUNCTUATION = re.compile(r"\s*([<>\[\].&])\s*")
_COMMA = re.compile(r"\s*,\s*")
_WHITESPACE = re.compile(r"\s+")


def normalize_type_text(text: str) -> str:
    """Canonical spelling of a type as written: ``Map< K ,V >`` -> ``Map<K, V>``."""
    text = _WHITESPACE.sub(" ", text.strip())
    text = _SPACED_PUNCTUATION.sub(r"\1", text)
    return _COMMA.sub(", ", text)


def type_reference(node: tree_sitter.Node, source: bytes) -> TypeReference:
    return TypeReference(
        text=normalize_type_text(_text(node, source)),
        simple_name=class_type_name(node, source),
    )


def class_type_name(node: tree_sitter.Node, source: bytes) -> Optional[str]:
    """Identifier of a class/interface type, ignoring qualifiers and type arguments.

    ``java.util.List<Order>`` -> ``List``. Primitive, void and array types
    have no class name.
    """
    if node.type == "type_identifier":
        return _text(node, source)
    if node.type == "scoped_type_identifier":
        identifiers = [c for c in node.named_children if c.type == "type_identifier"]
        return _text(identifiers[-1], source) if identifiers else None
    if node.type == "generic_type":
        for child in node.named_children:
            if child.type in ("type_identifier", "scoped_type_identifier"):
                return class_type_name(child, source)
        return None
    if node.type == "annotated_type":
        named = node.named_children
        return class_type_name(named[-1], source) if named else None
    return None


def _declared_type(type_node: tree_sitter.Node, declarator: tree_sitter.Node, source: bytes) -> TypeReference:
    # C-style array declarators: ``String names[];``
    dims = declarator.child_by_field_name("dimensions")
    if dims is not None:
        text = normalize_type_text(_text(type_node, source) + _text(dims, source))
        return TypeReference(text=text)
    return type_reference(type_node, source)


def _extract_parameter(node: tree_sitter.Node, source: bytes) -> Optional[Parameter]:
    if node.type == "formal_parameter":
        type_node = node.child_by_field_name("type")
        name = _get_child_text(node, "name", source)
        if type_node is None or not name:
            return None
        return Parameter(name=name, type=_declared_type(type_node, node, source))

    if node.type == "spread_parameter":
        # Varargs keep the element type: ``Order... orders`` -> Order
        type_node = None
        name = None
        for child in node.named_children:
            if child.type == "variable_declarator":
                name = _get_child_text(child, "name", source)
            elif child.type not in ("modifiers", "identifier") and type_node is None:
                type_node = child
        name = name or _get_child_text(node, "name", source)
        if type_node is None or not name:
            return None
        return Parameter(name=name, type=type_reference(type_node, source))

    return None


def _type_list(node: tree_sitter.Node, source: bytes) -> List[TypeReference]:
    """Types named by a superclass / super_interfaces / extends_interfaces clause."""
    refs = []
    for child in node.named_children:
        if child.type == "type_list":
            refs.extend(type_reference(t, source) for t in child.named_children)
        else:
            refs.append(type_reference(child, source))
    return refs


# =============================================================================
# Helpers
# =============================================================================


def _iter_type_nodes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Pre-order walk yielding every class and interface declaration node.

    Iterative: expression trees in generated code can nest thousands of levels deep.
    """
    stack = list(reversed(root.named_children))
    while stack:
        node = stack.pop()
        if node.type in _TYPE_DECLARATIONS:
            yield node
        stack.extend(reversed(node.named_children))


def _visibility(node: tree_sitter.Node) -> Visibility:
    modifiers = _get_child_by_type(node, "modifiers")
    if modifiers:
        for child in modifiers.children:
            if child.type in _VISIBILITY_MODIFIERS:
                return _VISIBILITY_MODIFIERS[child.type]
    return Visibility.PACKAGE


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _get_child_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    if child:
        return _text(child, source)
    return None


def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
    for child in node.children:
        if child.type == type_name:
            return child
    return None
