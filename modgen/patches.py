"""Declarative wiring rules for the shared configuration files.

Each ``PatchSpec`` names the shared file it edits, the markers proving the
edit was already made, and its insertions.  Fragments, literal anchors and
pattern anchors (markers included) are Jinja2 strings rendered with
``module`` / ``template`` name sets; module names are identifiers, so a
rendered pattern needs no escaping.  Wiring a new shared file means adding
one entry to ``PATCH_TABLE``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import GeneratorConfig
from .naming import ModuleNameSet
from .patcher import ConfigPatch, Insertion, LiteralAnchor, PatternAnchor
from .templates import FragmentRenderer

# Closing ``];`` of the file's top-level ``return [...]``.
CLOSING_ARRAY = PatternAnchor(r"^\];")

# Closing ``),`` of the last route group, right before ``];``.
CLOSING_ROUTE_GROUP = PatternAnchor(r"^[ \t]*\),?[ \t]*\n\];")


@dataclass(frozen=True)
class InsertionSpec:
    fragment: str
    anchors: tuple[LiteralAnchor | PatternAnchor, ...]


@dataclass(frozen=True)
class PatchSpec:
    key: str
    description: str
    markers: tuple[LiteralAnchor | PatternAnchor, ...]
    insertions: tuple[InsertionSpec, ...]


REPOSITORY_IMPORTS = r"""use App\Domain\{{ module.pascal }}\Repository\{{ module.pascal }}RepositoryInterface;
use App\Infrastructure\Persistence\{{ module.pascal }}\{{ module.pascal }}Repository;
"""

REPOSITORY_ENTRY = r"""    {{ module.pascal }}RepositoryInterface::class => [
        'class' => {{ module.pascal }}Repository::class,
        'setLockVersionConfig()' => [Reference::to(LockVersionConfig::class)],
        'setCurrentUser()' => [Reference::to(CurrentUser::class)],
        '__construct()' => [
            'params' => $params['app/optimisticLock'] ?? [],
        ],
    ],
"""

ACCESS_BLOCK = r"""    // {{ module.pascal }} Permissions
{% for action in ("index", "data", "view", "create", "update", "delete", "restore") %}
    '{{ module.lower }}.{{ action }}' => static fn () => true,
{% endfor %}

"""

ROUTES_BLOCK = r"""            // {{ module.pascal }} Routes
            Route::get('/{{ module.kebab }}')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}DataAction::class)->name('v1/{{ module.kebab }}/index'),
            Route::post('/{{ module.kebab }}/data')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}DataAction::class)->name('v1/{{ module.kebab }}/data'),
            Route::get('/{{ module.kebab }}/{id:\\d+}')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}ViewAction::class)->name('v1/{{ module.kebab }}/view'),
            Route::post('/{{ module.kebab }}')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}CreateAction::class)->name('v1/{{ module.kebab }}/create'),
            Route::put('/{{ module.kebab }}/{id:\\d+}')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}UpdateAction::class)->name('v1/{{ module.kebab }}/update'),
            Route::delete('/{{ module.kebab }}/{id:\\d+}')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}DeleteAction::class)->name('v1/{{ module.kebab }}/delete'),
            Route::patch('/{{ module.kebab }}/{id:\\d+}/restore')->action(\App\Api\V1\{{ module.pascal }}\Action\{{ module.pascal }}RestoreAction::class)->name('v1/{{ module.kebab }}/restore'),

"""


PATCH_TABLE: tuple[PatchSpec, ...] = (
    PatchSpec(
        key="repository",
        description="repository wiring",
        markers=(
            LiteralAnchor(r"\{{ module.pascal }}\Repository\{{ module.pascal }}RepositoryInterface"),
            PatternAnchor(r"(?<![A-Za-z0-9_]){{ module.pascal }}RepositoryInterface::class\s*=>"),
        ),
        insertions=(
            InsertionSpec(
                fragment=REPOSITORY_IMPORTS,
                anchors=(
                    LiteralAnchor(
                        r"use App\Infrastructure\Persistence\{{ template.pascal }}\{{ template.pascal }}Repository;"
                        "\n"
                    ),
                    LiteralAnchor(
                        r"use App\Domain\{{ template.pascal }}\Repository\{{ template.pascal }}RepositoryInterface;"
                        "\n"
                    ),
                    LiteralAnchor("declare(strict_types=1);\n"),
                ),
            ),
            InsertionSpec(fragment=REPOSITORY_ENTRY, anchors=(CLOSING_ARRAY,)),
        ),
    ),
    PatchSpec(
        key="access",
        description="permission map",
        markers=(LiteralAnchor("'{{ module.lower }}.index'"),),
        insertions=(
            InsertionSpec(
                fragment=ACCESS_BLOCK,
                anchors=(
                    LiteralAnchor("// Permissions\n"),
                    LiteralAnchor("return [\n"),
                    CLOSING_ARRAY,
                ),
            ),
        ),
    ),
    PatchSpec(
        key="routes",
        description="route table",
        markers=(LiteralAnchor("// {{ module.pascal }} Routes"),),
        insertions=(
            InsertionSpec(
                fragment=ROUTES_BLOCK,
                anchors=(LiteralAnchor("->routes(\n"), CLOSING_ROUTE_GROUP),
            ),
        ),
    ),
)


def build_patches(
    config: GeneratorConfig,
    names: ModuleNameSet,
    template: ModuleNameSet,
    renderer: FragmentRenderer | None = None,
    table: tuple[PatchSpec, ...] = PATCH_TABLE,
) -> list[ConfigPatch]:
    """Render *table* into concrete ``ConfigPatch`` objects for one module."""
    renderer = renderer or FragmentRenderer()
    context = renderer.build_context(names, template)

    def _anchor(anchor: LiteralAnchor | PatternAnchor) -> LiteralAnchor | PatternAnchor:
        if isinstance(anchor, LiteralAnchor):
            return LiteralAnchor(renderer.render_string(anchor.text, context))
        return PatternAnchor(renderer.render_string(anchor.pattern, context))

    patches: list[ConfigPatch] = []
    for entry in table:
        insertions = tuple(
            Insertion(
                fragment=renderer.render_string(item.fragment, context),
                anchors=tuple(_anchor(a) for a in item.anchors),
            )
            for item in entry.insertions
        )
        patches.append(
            ConfigPatch(
                target_file=config.shared_path(entry.key),
                markers=tuple(_anchor(m) for m in entry.markers),
                insertions=insertions,
                description=entry.description,
            )
        )
    return patches
