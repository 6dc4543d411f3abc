"""Сквозные свойства компилятора: длины узлов, структура дерева, обход."""

import pytest

import occ
from occ.errors import NestingTooDeep, TemplateSyntaxError
from occ.template import compile_template
from occ.template.nodes import (
    NodeType,
    TagNode,
    TemplateStringNode,
    TextLiteralNode,
    VariableDeclarationTagNode,
    collect_declared_names,
    collect_tag_names,
    iter_nodes,
)

PROGRAMS = [
    "plain text",
    "Hello {name}!",
    "{join ', ' 'a' {b} `c{d}`}",
    "{!comment with {braces}\n} after",
    "{x=`v{y}`}{x}",
    "{x = 'a' }{ join\n'-'\n{x}\n\"q\" }",
    "esc \\{ \\` \\\\ \\n tail\\",
    "x `y {z} \\` w` end",
]


def _spans_children(node):
    if isinstance(node, (TemplateStringNode, TagNode)):
        return node.children
    if isinstance(node, VariableDeclarationTagNode):
        return [node.data]
    return []


class TestTextLength:

    @pytest.mark.parametrize("source", PROGRAMS)
    def test_root_consumes_whole_source(self, source):
        assert compile_template(source).text_length == len(source)

    @pytest.mark.parametrize("source", PROGRAMS)
    def test_children_fit_inside_parent(self, source):
        for node in iter_nodes(compile_template(source)):
            children = _spans_children(node)
            assert sum(c.text_length for c in children) <= node.text_length

    @pytest.mark.parametrize("source", PROGRAMS)
    def test_template_children_cover_template(self, source):
        """Дети шаблонной строки вместе с её кавычками покрывают её целиком."""
        for node in iter_nodes(compile_template(source)):
            if isinstance(node, TemplateStringNode):
                delimiters = 0 if node.parent is None else 2
                assert sum(c.text_length for c in node.children) + delimiters == node.text_length

    def test_prefix_reparses_to_same_tree(self):
        source = "{f 'a'}rest"
        tag = compile_template(source).children[0]

        again = compile_template(source[:tag.text_length]).children[0]
        assert again == tag


class TestTreeShape:

    @pytest.mark.parametrize("source", PROGRAMS)
    def test_no_adjacent_text_literals(self, source):
        for node in iter_nodes(compile_template(source)):
            if isinstance(node, TemplateStringNode):
                kinds = [isinstance(c, TextLiteralNode) for c in node.children]
                assert not any(a and b for a, b in zip(kinds, kinds[1:]))

    @pytest.mark.parametrize("source", PROGRAMS)
    def test_parent_links(self, source):
        root = compile_template(source)
        for node in iter_nodes(root):
            for child in _spans_children(node):
                assert child.parent is node

    def test_node_types(self):
        tree = compile_template("a{b}{!c}{d='e'}`f`")

        assert [c.type for c in tree.children] == [
            NodeType.TEXT_LITERAL,
            NodeType.TAG,
            NodeType.COMMENT_TAG,
            NodeType.VARIABLE_DECLARATION_TAG,
            NodeType.TEMPLATE_STRING,
        ]
        assert tree.type is NodeType.TEMPLATE_STRING
        assert tree.children[3].data.type is NodeType.SINGLE_QUOTE_STRING

    def test_equality_ignores_parent(self):
        assert compile_template("{a 'b'}") == compile_template("{a 'b'}")
        assert compile_template("{a 'b'}") != compile_template("{a 'c'}")


class TestTreeWalk:

    def test_collect_tag_names_in_document_order(self):
        tree = compile_template("{a {b}} `{c}` {x={d}} {a}")

        assert collect_tag_names(tree) == ["a", "b", "c", "d", "a"]

    def test_collect_declared_names(self):
        tree = compile_template("{x='1'} `{y='2'}` {z=`{w='3'}`}")

        assert collect_declared_names(tree) == ["x", "y", "z", "w"]


class TestPackageEntryPoint:

    def test_compile_alias(self):
        assert occ.compile("Hi {name}") == compile_template("Hi {name}")


class TestNestingDepth:

    def test_moderate_nesting(self):
        depth = 50
        source = "{x=" + "{join '' `" * depth + "a" + "`}" * depth + "}{x}"

        assert occ.render(source) == "a"

    def test_excessive_nesting_is_a_syntax_error(self):
        """Глубина сверх стека интерпретатора - ошибка пользователя, а не падение."""
        depth = 2000
        source = "{f " * depth + "'a'" + "}" * depth

        with pytest.raises(NestingTooDeep) as exc:
            compile_template(source)

        assert isinstance(exc.value, TemplateSyntaxError)
        assert exc.value.index == 0
        assert str(exc.value).startswith("Nesting too deep\n")


class TestLargeDocuments:

    def test_many_sibling_tags(self):
        count = 20000
        tree = compile_template("{f 'a'}" * count)

        assert len(tree.children) == count
        assert tree.children[-1].text_length == 7
        assert tree.text_length == 7 * count
