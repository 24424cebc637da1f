"""Integration tests for end-to-end module generation.

These tests run the real generator against the miniature template project
from ``conftest.py`` and check the generated tree and the wired shared
configuration files together.

No PHP runtime or database is required.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from modgen.config import GeneratorConfig
from modgen.patcher import PatchOutcome
from modgen.scaffolder import ModuleGenerator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* to its bytes."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def _generate(config: GeneratorConfig, module: str, table: str | None = None, now=None):
    return ModuleGenerator(config, verbose=False).generate(module, table, now=now)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestOrderModule:
    """Generate ``Order`` from ``Example`` and inspect the whole result."""

    def test_layers_and_artifacts(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)

        expected = [
            "src/Api/V1/Order/Action/OrderViewAction.php",
            "src/Application/Order/OrderService.php",
            "src/Domain/Order/Order.php",
            "src/Domain/Order/logo.bin",
            "src/Domain/Order/Repository/OrderRepositoryInterface.php",
            "src/Infrastructure/Persistence/Order/OrderRepository.php",
            "src/Migration/M20261017142501CreateOrderTable.php",
            "src/Seeder/SeedOrderData.php",
            "src/Seeder/Fixtures/order.yaml",
        ]
        for relative in expected:
            assert (project_root / relative).is_file(), relative

    def test_no_template_tokens_left_in_text_files(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        for layer in ("src/Api/V1/Order", "src/Application/Order", "src/Domain/Order"):
            for path in (project_root / layer).rglob("*.php"):
                text = path.read_text()
                assert "Example" not in text, path
                assert "example" not in text, path
                assert "EXAMPLE" not in text, path

    def test_permission_keys_match_action_constants(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        action = (project_root / "src/Api/V1/Order/Action/OrderViewAction.php").read_text()
        access = (project_root / "config/common/access.php").read_text()
        assert "public const PERMISSION = 'order.view';" in action
        assert "'order.view' => static fn () => true," in access

    def test_fixture_is_loadable(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        data = yaml.safe_load((project_root / "src/Seeder/Fixtures/order.yaml").read_text())
        rows = data["App\\Domain\\Order\\Order"]["order_{1..5}"]
        assert rows["name"] == "Order Item <current()>"
        assert rows["description"] == "Sample Order"

    def test_template_module_untouched(self, config, project_root, fixed_now):
        before = {
            key: value
            for key, value in _snapshot(project_root).items()
            if "Example" in key or "example" in key
        }
        _generate(config, "Order", now=fixed_now)
        after = _snapshot(project_root)
        for key, value in before.items():
            assert after[key] == value, key


@pytest.mark.integration
class TestIdempotentRerun:
    """A second run with the same module creates and changes nothing."""

    def test_rerun_is_byte_identical(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        first = _snapshot(project_root)

        report = _generate(config, "Order")

        assert _snapshot(project_root) == first
        assert report.files_created == []
        assert report.directories_created == []
        assert [p.outcome for p in report.patches] == [PatchOutcome.ALREADY_PRESENT] * 3

    def test_manual_edits_survive(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        service = project_root / "src/Application/Order/OrderService.php"
        service.write_text("<?php // customised\n")

        _generate(config, "Order", now=fixed_now)

        assert service.read_text() == "<?php // customised\n"

    def test_partial_tree_is_completed(self, config, project_root, fixed_now):
        _generate(config, "Order", now=fixed_now)
        removed = project_root / "src/Domain/Order/Repository/OrderRepositoryInterface.php"
        removed.unlink()

        report = _generate(config, "Order", now=fixed_now)

        assert removed.is_file()
        assert [a.target_path for a in report.files_created] == [removed]


@pytest.mark.integration
class TestTableDivergence:
    """``Product`` stored in ``inventory_items``."""

    def test_code_uses_module_name_storage_uses_table(self, config, project_root, fixed_now):
        _generate(config, "Product", "inventory_items", now=fixed_now)

        repository = (
            project_root / "src/Infrastructure/Persistence/Product/ProductRepository.php"
        ).read_text()
        assert "final class ProductRepository implements ProductRepositoryInterface" in repository
        assert "private const TABLE = 'inventory_items';" in repository
        assert "private const SEQUENCE = 'inventory_items_id_seq';" in repository

        migration = (
            project_root / "src/Migration/M20261017142501CreateProductTable.php"
        ).read_text()
        assert "private const TABLE_NAME = 'inventory_items';" in migration

        seeder = (project_root / "src/Seeder/SeedProductData.php").read_text()
        assert "protected const TABLE_NAME = 'inventory_items';" in seeder
        assert "protected const YAML_FILE = 'product.yaml';" in seeder

    def test_table_name_containing_template_token(self, config, project_root, fixed_now):
        _generate(config, "Order", "example_orders", now=fixed_now)

        repository = (
            project_root / "src/Infrastructure/Persistence/Order/OrderRepository.php"
        ).read_text()
        assert "private const TABLE = 'example_orders';" in repository
        assert "private const SEQUENCE = 'example_orders_id_seq';" in repository

        migration = (
            project_root / "src/Migration/M20261017142501CreateOrderTable.php"
        ).read_text()
        assert "private const TABLE_NAME = 'example_orders';" in migration

    def test_permissions_and_routes_use_module_name(self, config, project_root, fixed_now):
        _generate(config, "Product", "inventory_items", now=fixed_now)
        access = (project_root / "config/common/access.php").read_text()
        routes = (project_root / "config/common/routes.php").read_text()
        assert "'product.index'" in access
        assert "inventory_items" not in access
        assert "Route::get('/product')" in routes


@pytest.mark.integration
class TestSharedConfigSafety:
    """Shared files are either patched correctly or left byte-identical."""

    def test_unanchored_files_left_byte_identical(self, config, project_root, fixed_now):
        odd = b"<?php\r\n\r\n$config = array();\r\n"
        for key in ("repository", "access", "routes"):
            config.shared_path(key).write_bytes(odd)

        report = _generate(config, "Order", now=fixed_now)

        assert [p.outcome for p in report.patches] == [PatchOutcome.ANCHOR_NOT_FOUND] * 3
        for key in ("repository", "access", "routes"):
            assert config.shared_path(key).read_bytes() == odd
        # Code generation still completed.
        assert (project_root / "src/Domain/Order/Order.php").is_file()

    def test_insertions_keep_existing_entries(self, config, project_root, fixed_now):
        originals = {key: config.shared_path(key).read_text() for key in ("repository", "access", "routes")}

        _generate(config, "Order", now=fixed_now)

        for key, original in originals.items():
            patched = config.shared_path(key).read_text()
            # Every original line is still present, in order.
            remaining = iter(patched.splitlines())
            assert all(line in remaining for line in original.splitlines()), key

    def test_two_modules_both_wired(self, config, project_root, fixed_now):
        _generate(config, "ProductOrder", now=fixed_now)
        _generate(config, "Order", now=fixed_now)

        repository = config.shared_path("repository").read_text()
        routes = config.shared_path("routes").read_text()
        assert repository.count("ProductOrderRepositoryInterface::class => [") == 1
        assert repository.count("    OrderRepositoryInterface::class => [") == 1
        assert "// ProductOrder Routes" in routes
        assert "// Order Routes" in routes
        assert "Route::get('/product-order')" in routes
