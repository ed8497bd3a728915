"""Tests for the AST parser module."""

import pytest

from docloom.core.ast_parser import (
    SourceUnit,
    TypeKind,
    Visibility,
    detect_language,
    iter_source_files,
    parse_file,
    parse_source,
)


# =========================================================================
# Sample Java source fixtures
# =========================================================================

ORDER = '''
package shop;

import java.util.List;
import java.util.Map;
import static java.util.Objects.requireNonNull;
import shop.model.*;

public class Order extends BaseEntity implements Comparable<Order>, Serializable {
    private Customer customer;
    protected List<LineItem> items;
    public static final int MAX_ITEMS = 50;
    String note;
    private int quantity, discount;
    private String[] tags;
    private Map< String ,  Integer > counts;

    public Order(Customer customer) {
        this.customer = customer;
    }

    public String getId() {
        return "1";
    }

    private void addItems(LineItem first, LineItem... rest) {
    }

    protected Customer findCustomer(String name, int limit) {
        return customer;
    }

    int[] totals() {
        return new int[0];
    }
}
'''

REPOSITORY = '''
package shop.data;

public interface Repository<T> extends Iterable<T>, AutoCloseable {
    int PAGE_SIZE = 20;

    T find(long id);

    public void save(T entity);
}
'''

NESTED = '''
package shop;

public class Outer {
    private Inner inner;

    static class Inner {
        interface Callback {
            void done();
        }
    }

    enum Status {
        OPEN, CLOSED;

        class InEnum {}
    }
}
'''

NO_PACKAGE = '''
class Plain {
    java.util.List<String> names;
    Outer.Inner inner;
}
'''

BROKEN = '''
package shop;

public class Broken {
    void f( {
'''

EMPTY_FILE = ''


def _decl(unit: SourceUnit, name: str):
    return next(d for d in unit.declarations if d.name == name)


# =========================================================================
# Tests: Language detection and walking
# =========================================================================

class TestLanguageDetection:
    def test_java(self):
        assert detect_language("src/shop/Order.java") == "java"

    def test_unknown(self):
        assert detect_language("foo/bar.py") is None

    def test_case_insensitive(self):
        assert detect_language("FOO.JAVA") == "java"

    def test_unsupported_file_rejected(self):
        with pytest.raises(ValueError):
            parse_source("x", "notes.txt")


class TestSourceWalk:
    def test_sorted_and_filtered(self, java_tree):
        root = java_tree({
            "b/B.java": "class B {}",
            "a/A.java": "class A {}",
            "Z.java": "class Z {}",
            "readme.md": "# not java",
            ".git/Hidden.java": "class Hidden {}",
        })
        names = [p.relative_to(root).as_posix() for p in iter_source_files(root)]
        assert names == ["Z.java", "a/A.java", "b/B.java"]

    def test_only_vcs_directories_skipped(self, java_tree):
        root = java_tree({
            "a/A.java": "class A {}",
            ".generated/Gen.java": "class Gen {}",
            "node_modules/N.java": "class N {}",
            ".svn/S.java": "class S {}",
            ".hg/H.java": "class H {}",
        })
        names = [p.relative_to(root).as_posix() for p in iter_source_files(root)]
        assert names == [".generated/Gen.java", "a/A.java", "node_modules/N.java"]


# =========================================================================
# Tests: Package and imports
# =========================================================================

class TestPackageAndImports:
    def test_package(self):
        result = parse_source(ORDER, "shop/Order.java")
        assert result.package == "shop"

    def test_no_package(self):
        result = parse_source(NO_PACKAGE, "Plain.java")
        assert result.package == ""
        assert result.declarations[0].qualified_name == "Plain"

    def test_imports(self):
        result = parse_source(ORDER, "shop/Order.java")
        names = [i.name for i in result.imports]
        assert names == ["java.util.List", "java.util.Map", "java.util.Objects.requireNonNull", "shop.model"]

        list_import = result.imports[0]
        assert list_import.identifier == "List"
        assert list_import.qualifier == "java.util"

        assert result.imports[2].is_static
        assert result.imports[3].is_asterisk


# =========================================================================
# Tests: Classes and members
# =========================================================================

class TestClassDeclaration:
    def test_kind_and_names(self):
        result = parse_source(ORDER, "shop/Order.java")
        assert result.is_valid
        order = _decl(result, "Order")
        assert order.kind is TypeKind.CLASS
        assert order.qualified_name == "shop.Order"

    def test_extends_and_implements(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        assert [r.simple_name for r in order.extends] == ["BaseEntity"]
        assert [r.text for r in order.implements] == ["Comparable<Order>", "Serializable"]
        assert [r.simple_name for r in order.implements] == ["Comparable", "Serializable"]

    def test_fields(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        fields = {f.name: f for f in order.fields}

        assert fields["customer"].visibility is Visibility.PRIVATE
        assert fields["customer"].type.simple_name == "Customer"

        assert fields["items"].visibility is Visibility.PROTECTED
        assert fields["items"].type.text == "List<LineItem>"
        assert fields["items"].type.simple_name == "List"

        assert fields["MAX_ITEMS"].visibility is Visibility.PUBLIC
        assert fields["MAX_ITEMS"].type.simple_name is None

        assert fields["note"].visibility is Visibility.PACKAGE
        assert fields["tags"].type.text == "String[]"
        assert fields["tags"].type.simple_name is None
        assert fields["counts"].type.text == "Map<String, Integer>"

    def test_multi_variable_field_declaration(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        group = next(g for g in order.field_groups if len(g.members) > 1)
        assert [m.name for m in group.members] == ["quantity", "discount"]
        assert len(order.field_groups) == 7
        assert len(order.fields) == 8

    def test_methods_exclude_constructors(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        assert [m.name for m in order.methods] == ["getId", "addItems", "findCustomer", "totals"]

    def test_method_signatures(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        methods = {m.name: m for m in order.methods}

        get_id = methods["getId"]
        assert get_id.visibility is Visibility.PUBLIC
        assert get_id.return_type.text == "String"
        assert get_id.parameters == []

        find = methods["findCustomer"]
        assert find.visibility is Visibility.PROTECTED
        assert find.return_type.simple_name == "Customer"
        assert [(p.name, p.type.text) for p in find.parameters] == [("name", "String"), ("limit", "int")]

        assert methods["totals"].visibility is Visibility.PACKAGE
        assert methods["totals"].return_type.simple_name is None

    def test_varargs_keep_element_type(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        add = next(m for m in order.methods if m.name == "addItems")
        assert [(p.name, p.type.simple_name) for p in add.parameters] == [
            ("first", "LineItem"),
            ("rest", "LineItem"),
        ]

    def test_void_has_no_class_name(self):
        order = _decl(parse_source(ORDER, "shop/Order.java"), "Order")
        add = next(m for m in order.methods if m.name == "addItems")
        assert add.return_type.text == "void"
        assert add.return_type.simple_name is None


class TestInterfaceDeclaration:
    def test_interface(self):
        result = parse_source(REPOSITORY, "shop/data/Repository.java")
        repo = result.declarations[0]
        assert repo.kind is TypeKind.INTERFACE
        assert repo.qualified_name == "shop.data.Repository"
        assert [r.simple_name for r in repo.extends] == ["Iterable", "AutoCloseable"]
        assert repo.implements == []

    def test_constants_are_fields(self):
        repo = parse_source(REPOSITORY, "shop/data/Repository.java").declarations[0]
        assert [f.name for f in repo.fields] == ["PAGE_SIZE"]
        assert repo.fields[0].visibility is Visibility.PACKAGE

    def test_methods_use_explicit_visibility(self):
        repo = parse_source(REPOSITORY, "shop/data/Repository.java").declarations[0]
        methods = {m.name: m for m in repo.methods}
        assert methods["find"].visibility is Visibility.PACKAGE
        assert methods["save"].visibility is Visibility.PUBLIC
        assert methods["find"].return_type.simple_name == "T"


class TestNestedDeclarations:
    def test_preorder_and_package_qualified(self):
        result = parse_source(NESTED, "shop/Outer.java")
        assert [d.qualified_name for d in result.declarations] == [
            "shop.Outer",
            "shop.Inner",
            "shop.Callback",
            "shop.InEnum",
        ]

    def test_enum_is_not_a_declaration(self):
        result = parse_source(NESTED, "shop/Outer.java")
        assert "Status" not in {d.name for d in result.declarations}

    def test_nested_kinds(self):
        result = parse_source(NESTED, "shop/Outer.java")
        assert _decl(result, "Callback").kind is TypeKind.INTERFACE
        assert _decl(result, "Inner").kind is TypeKind.CLASS

    def test_qualified_type_uses_last_identifier(self):
        plain = parse_source(NO_PACKAGE, "Plain.java").declarations[0]
        fields = {f.name: f for f in plain.fields}
        assert fields["names"].type.simple_name == "List"
        assert fields["names"].type.text == "java.util.List<String>"
        assert fields["inner"].type.simple_name == "Inner"


# =========================================================================
# Tests: Edge cases
# =========================================================================

class TestEdgeCases:
    def test_empty_file(self):
        result = parse_source(EMPTY_FILE, "Empty.java")
        assert result.is_valid
        assert result.declarations == []
        assert result.imports == []

    def test_syntax_error_yields_no_declarations(self):
        result = parse_source(BROKEN, "shop/Broken.java")
        assert not result.is_valid
        assert result.declarations == []
        assert result.errors[0].severity == "error"
        assert result.errors[0].line >= 1

    def test_line_count(self):
        result = parse_source(ORDER, "shop/Order.java")
        assert result.line_count > 0

    def test_parse_file_relative_path(self, java_tree):
        root = java_tree({"shop/Order.java": ORDER})
        result = parse_file(str(root / "shop" / "Order.java"), project_root=str(root))
        assert result.file_path == "shop/Order.java"
        assert result.declarations[0].qualified_name == "shop.Order"

    def test_unreadable_file_reports_error(self, tmp_path):
        result = parse_file(tmp_path / "Missing.java")
        assert not result.is_valid
        assert result.declarations == []
