"""Template rendering engine."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Set, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound, nodes, pass_context
from jinja2.runtime import Context

from .pages import SourceTemplate
from .partials import PartialCatalog

logger = logging.getLogger(__name__)

PARTIAL_FUNCTION = "partial"


class TemplateEngine:
    """
    Render page templates with explicit, per-page context.

    Every page render starts from a fresh copy of the site variables plus a
    ``page`` mapping. Templates pull in partials with
    ``{{ partial("header") }}``; the partial sees the caller's variables
    (including anything the page ``set`` before the call) and any keyword
    overrides, e.g. ``{{ partial("card", title="Docs") }}``. Loop targets are
    not part of the caller's context and must be passed as keywords.
    """

    def __init__(
        self,
        source_dir: Path,
        catalog: PartialCatalog,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.source_dir = Path(source_dir)
        self.catalog = catalog
        self.context: Dict[str, Any] = dict(context or {})
        self.environment = Environment(
            loader=FileSystemLoader(str(self.source_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.environment.globals[PARTIAL_FUNCTION] = self._make_partial_function()

    def _make_partial_function(self):
        environment = self.environment

        @pass_context
        def partial(ctx: Context, name: str, **overrides: Any) -> str:
            template = self.partial_template(name)
            variables = {
                key: value
                for key, value in ctx.get_all().items()
                if key not in environment.globals or environment.globals[key] is not value
            }
            variables.update(overrides)
            return template.render(variables)

        return partial

    def loader_name(self, path: Path) -> str:
        return Path(path).relative_to(self.source_dir).as_posix()

    def partial_template(self, name: str) -> Template:
        """Load the partial identified by name; unknown ids raise UnknownPartial."""
        path = self.catalog.resolve(name)
        return self.environment.get_template(self.loader_name(path))

    def page_context(self, page: SourceTemplate) -> Dict[str, Any]:
        context = copy.deepcopy(self.context)
        context["page"] = {
            "name": page.name,
            "stem": page.stem,
            "output": page.output_name,
        }
        return context

    def validate(self, template_name: str) -> None:
        """
        Check every static include and partial reference reachable from a template.

        Raises:
            UnknownPartial: A ``partial("...")`` call names an id outside the catalog.
            jinja2.TemplateNotFound: An include/import/extends target does not exist.
            jinja2.TemplateSyntaxError: A template in the chain does not parse.
        """
        self._check_references(template_name, set())

    def _check_references(self, template_name: str, seen: Set[str]) -> None:
        if template_name in seen:
            return
        seen.add(template_name)
        source, _, _ = self.environment.loader.get_source(self.environment, template_name)
        ast = self.environment.parse(source, name=template_name)

        for reference, optional in _find_template_references(ast):
            if optional and not self._template_exists(reference):
                continue
            self._check_references(reference, seen)

        for partial_id in _find_partial_calls(ast):
            path = self.catalog.resolve(partial_id)
            self._check_references(self.loader_name(path), seen)

    def _template_exists(self, template_name: str) -> bool:
        try:
            self.environment.loader.get_source(self.environment, template_name)
        except TemplateNotFound:
            return False
        return True

    def render_page(self, page: SourceTemplate) -> str:
        """
        Validate and render a single page template to a string.
        """
        logger.debug("Rendering template: %s", page.path)
        self.validate(page.name)
        template = self.environment.get_template(page.name)
        return template.render(self.page_context(page))


def _find_partial_calls(ast: nodes.Template) -> Iterator[str]:
    for call in ast.find_all(nodes.Call):
        if not isinstance(call.node, nodes.Name) or call.node.name != PARTIAL_FUNCTION:
            continue
        if call.args and isinstance(call.args[0], nodes.Const) and isinstance(call.args[0].value, str):
            yield call.args[0].value


def _find_template_references(ast: nodes.Template) -> Iterator[Tuple[str, bool]]:
    """
    Yield ``(name, optional)`` for every constant extends/include/import target.

    ``optional`` is true for ``{% include ... ignore missing %}``. Dynamic
    targets and include lists are resolved by Jinja2 at render time.
    """
    for node in ast.find_all((nodes.Extends, nodes.FromImport, nodes.Import, nodes.Include)):
        target = node.template
        if not isinstance(target, nodes.Const) or not isinstance(target.value, str):
            continue
        yield target.value, isinstance(node, nodes.Include) and node.ignore_missing
