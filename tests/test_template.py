"""End-to-end tests: resolve, load, parse, compile, post-process."""

import pytest

from kiwi.config import EngineConfig, TemplateOptions
from kiwi.exceptions import (
    RelativePathError,
    RenderError,
    TemplateNotFoundError,
    TokenCompileError,
)
from kiwi.template import Compiler, Template


@pytest.fixture
def views(tmp_path):
    (tmp_path / "partials").mkdir()
    (tmp_path / "page.kiwi").write_text(
        '{% include "partials/header" %}<p>{{ body }}</p>{% include "footer.html" %}'
    )
    (tmp_path / "partials" / "header.kiwi").write_text(
        "<h1>{{ title | upper }}</h1>{% include '../logo' %}"
    )
    (tmp_path / "logo.kiwi").write_text("[logo]")
    (tmp_path / "footer.html").write_text("<footer/>")
    return tmp_path


class TestRender:
    @pytest.mark.asyncio
    async def test_inline_source(self):
        template = Template("Hello {{ name }}!{# hidden #}")
        assert await template.render({"name": "World"}) == "Hello World!"

    @pytest.mark.asyncio
    async def test_missing_variable_renders_empty(self):
        assert await Template("[{{ nothing }}]").render() == "[]"

    @pytest.mark.asyncio
    async def test_expression_error(self):
        with pytest.raises(TokenCompileError):
            await Template("{{ 1 / 0 }}").render()

    @pytest.mark.asyncio
    async def test_processors_from_config(self):
        template = Template("  hi  ", config=EngineConfig(processors=["strip"]))
        assert await template.render() == "hi"

    @pytest.mark.asyncio
    async def test_explicit_processors_override_config(self):
        template = Template("a", config=EngineConfig(processors=["strip"]))
        assert await template.render(processors=[str.upper]) == "A"


class TestIncludes:
    @pytest.mark.asyncio
    async def test_nested_relative_includes(self, views):
        template = await Template.load(str(views / "page"))

        assert template.options.path == str(views / "page.kiwi")
        output = await template.render({"title": "home", "body": "text"})
        assert output == "<h1>HOME</h1>[logo]<p>text</p><footer/>"

    @pytest.mark.asyncio
    async def test_concurrent_compile_same_output(self, views):
        config = EngineConfig(concurrent_compile=True)
        template = await Template.load(str(views / "page"), config=config)
        output = await template.render({"title": "home", "body": "text"})
        assert output == "<h1>HOME</h1>[logo]<p>text</p><footer/>"

    @pytest.mark.asyncio
    async def test_include_from_pathless_template(self):
        with pytest.raises(RelativePathError):
            await Template('{% include "x" %}').render()

    @pytest.mark.asyncio
    async def test_missing_include(self, views):
        template = Template(
            '{% include "absent" %}',
            options=TemplateOptions(path=str(views / "page.kiwi")),
        )
        with pytest.raises(TemplateNotFoundError) as excinfo:
            await template.render()
        assert excinfo.value.path == str(views / "absent.kiwi")

    @pytest.mark.asyncio
    async def test_include_depth_limited(self, tmp_path):
        (tmp_path / "loop.kiwi").write_text('x{% include "loop" %}')
        template = await Template.load(
            str(tmp_path / "loop"), config=EngineConfig(max_include_depth=3)
        )
        with pytest.raises(RenderError, match="maximum include depth"):
            await template.render()

    @pytest.mark.asyncio
    async def test_variables_shared_with_includes(self, views):
        template = Template(
            "{% include 'logo' %}{{ v }}",
            options=TemplateOptions(path=str(views / "index.kiwi")),
        )
        compiler = Compiler(template=template, variables={"v": 1})
        assert await template.compile(compiler) == "[logo]1"
        assert compiler.depth == 0


class TestLoad:
    @pytest.mark.asyncio
    async def test_custom_reader(self, views):
        reads = []

        async def read(path, encoding):
            reads.append((path, encoding))
            return "stub"

        template = await Template.load(
            str(views / "logo"), config=EngineConfig(encoding="latin-1"), read=read
        )

        assert template.source == "stub"
        assert reads == [(str(views / "logo.kiwi"), "latin-1")]

    @pytest.mark.asyncio
    async def test_relative_name_needs_parent(self):
        with pytest.raises(RelativePathError):
            await Template.load("page")

    @pytest.mark.asyncio
    async def test_file_removed_after_resolution(self, tmp_path):
        (tmp_path / "gone.kiwi").write_text("x")

        async def read(path, encoding):
            raise FileNotFoundError(path)

        with pytest.raises(FileNotFoundError):
            await Template.load(str(tmp_path / "gone"), read=read)
