"""Shared pytest fixtures for the module generator test suite.

Provides reusable fixtures for:
- A miniature layered PHP project containing the ``Example`` template module
- A ``GeneratorConfig`` pointing at that project
- Pre-derived name sets for common module names
"""

from __future__ import annotations

import textwrap
from datetime import datetime
from pathlib import Path

import pytest

from modgen.config import GeneratorConfig
from modgen.naming import ModuleNameSet, derive


# ---------------------------------------------------------------------------
# Template project contents
# ---------------------------------------------------------------------------

VIEW_ACTION = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Api\\V1\\Example\\Action;

    use App\\Application\\Example\\ExampleService;

    final class ExampleViewAction
    {
        public const PERMISSION = 'example.view';

        public function __construct(private ExampleService $exampleService)
        {
        }
    }
""")

APPLICATION_SERVICE = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Application\\Example;

    use App\\Domain\\Example\\Repository\\ExampleRepositoryInterface;

    final class ExampleService
    {
        public const CACHE_PREFIX = 'EXAMPLE_CACHE';
    }
""")

DOMAIN_ENTITY = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Domain\\Example;

    final class Example
    {
    }
""")

REPOSITORY_INTERFACE = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Domain\\Example\\Repository;

    interface ExampleRepositoryInterface
    {
    }
""")

PERSISTENCE_REPOSITORY = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Infrastructure\\Persistence\\Example;

    final class ExampleRepository implements ExampleRepositoryInterface
    {
        private const TABLE = 'example';
        private const SEQUENCE = 'example_id_seq';
    }
""")

MIGRATION_TEMPLATE = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Migration;

    final class M20240101000000CreateExample implements RevertibleMigrationInterface
    {
        private const TABLE_NAME = 'example';

        public function up(MigrationBuilder $b): void
        {
            $b->createTable(self::TABLE_NAME, ['id' => 'pk']);
            $b->createIndex(self::TABLE_NAME, 'idx_example_name', 'name');
        }
    }
""")

SEED_TEMPLATE = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    namespace App\\Seeder;

    use App\\Domain\\Example\\Example;
    use App\\Domain\\Example\\Repository\\ExampleRepositoryInterface;

    final class SeedExampleData extends AbstractSeederData
    {
        protected const YAML_FILE = 'example.yaml';
        protected const TABLE_NAME = 'example';
        protected const ENTITY_CLASS = Example::class;

        public function __construct(
            private ExampleRepositoryInterface $exampleRepository,
        ) {
        }

        /**
         * Table the fixture rows are inserted into.
         */
        protected function getTableName(): string
        {
            return self::TABLE_NAME;
        }

        protected function getEntityClass(): string
        {
            return self::ENTITY_CLASS;
        }

        protected function isValidEntity(object $entity): bool
        {
            if ($entity instanceof Example) {
                return true; // {not a brace
            }
            return false;
        }

        protected function persist(object $entity): void
        {
            $this->exampleRepository->save($entity);
        }
    }
""")

FIXTURE_TEMPLATE = textwrap.dedent("""\
    App\\Domain\\Example\\Example:
      example_{1..5}:
        name: 'Example Item <current()>'
        description: 'Sample Example'
        code: '<exampleRandom()>'
""")

REPOSITORY_CONFIG = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    use App\\Domain\\Example\\Repository\\ExampleRepositoryInterface;
    use App\\Infrastructure\\Persistence\\Example\\ExampleRepository;
    use App\\Shared\\CurrentUser;
    use App\\Shared\\LockVersionConfig;
    use Yiisoft\\Definitions\\Reference;

    /** @var array $params */

    return [
        ExampleRepositoryInterface::class => [
            'class' => ExampleRepository::class,
        ],
    ];
""")

ACCESS_CONFIG = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    return [
        // Permissions
        // Example Permissions
        'example.index' => static fn () => true,
        'example.view' => static fn () => true,
    ];
""")

ROUTES_CONFIG = textwrap.dedent("""\
    <?php

    declare(strict_types=1);

    use Yiisoft\\Router\\Group;
    use Yiisoft\\Router\\Route;

    return [
        Group::create('/v1')
            ->routes(
                // Example Routes
                Route::get('/example')->action(ExampleDataAction::class)->name('v1/example/index'),
            ),
    ];
""")

BINARY_ASSET = b"\xff\xfe\x00Example\x00\x89"

TEMPLATE_FILES: dict[str, str] = {
    "src/Api/V1/Example/Action/ExampleViewAction.php": VIEW_ACTION,
    "src/Application/Example/ExampleService.php": APPLICATION_SERVICE,
    "src/Domain/Example/Example.php": DOMAIN_ENTITY,
    "src/Domain/Example/Repository/ExampleRepositoryInterface.php": REPOSITORY_INTERFACE,
    "src/Infrastructure/Persistence/Example/ExampleRepository.php": PERSISTENCE_REPOSITORY,
    "src/Migration/M20240101000000CreateExample.php": MIGRATION_TEMPLATE,
    "src/Seeder/SeedExampleData.php": SEED_TEMPLATE,
    "src/Seeder/Fixtures/example.yaml": FIXTURE_TEMPLATE,
    "config/common/repository.php": REPOSITORY_CONFIG,
    "config/common/access.php": ACCESS_CONFIG,
    "config/common/routes.php": ROUTES_CONFIG,
}


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A miniature project tree with the ``Example`` template module."""
    root = tmp_path / "api"
    for relative, content in TEMPLATE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    (root / "src/Domain/Example/logo.bin").write_bytes(BINARY_ASSET)
    yield root


@pytest.fixture
def config(project_root: Path) -> GeneratorConfig:
    """GeneratorConfig rooted at the miniature project."""
    return GeneratorConfig(project_root=project_root)


@pytest.fixture
def template_names() -> ModuleNameSet:
    return derive("Example")


@pytest.fixture
def order_names() -> ModuleNameSet:
    return derive("Order")


@pytest.fixture
def product_order_names() -> ModuleNameSet:
    return derive("ProductOrder")


@pytest.fixture
def fixed_now() -> datetime:
    """Deterministic generation time for migration names."""
    return datetime(2026, 10, 17, 14, 25, 1)
