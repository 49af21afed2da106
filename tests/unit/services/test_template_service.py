"""Tests for template validation and upload."""

from pathlib import Path

import pytest

from cfn_deploy.api.exceptions import (
    BundleError,
    MainTemplateNotFoundError,
    RemoteServiceError,
    TemplateValidationError,
    UploadError,
)
from cfn_deploy.core import load_bundle
from cfn_deploy.models import UploadPlan
from cfn_deploy.services import TemplateService


@pytest.fixture
def template_service(orchestrator, storage) -> TemplateService:
    return TemplateService(orchestrator, storage)


class TestValidateTemplates:
    async def test_all_valid(self, template_service: TemplateService, orchestrator, template_dir: Path) -> None:
        bundle = load_bundle(template_dir, "Stack.json")
        await template_service.validate_templates(bundle.files)
        assert len(orchestrator.validated) == 3

    async def test_failures_are_aggregated(self, template_service: TemplateService, orchestrator,
                                           template_dir: Path) -> None:
        (template_dir / "Bad1.json").write_text("INVALID one")
        (template_dir / "nested" / "Bad2.json").write_text("INVALID two")
        bundle = load_bundle(template_dir, "Stack.json")

        with pytest.raises(TemplateValidationError) as exc_info:
            await template_service.validate_templates(bundle.files)

        # Every template was submitted even though some failed
        assert len(orchestrator.validated) == 5
        assert len(exc_info.value.failures) == 2
        assert all(isinstance(f, RemoteServiceError) for f in exc_info.value.failures)
        assert exc_info.value.first is exc_info.value.failures[0]
        assert "Template format error" in str(exc_info.value)

    async def test_unreadable_template(self, template_service: TemplateService, tmp_path: Path) -> None:
        with pytest.raises(TemplateValidationError) as exc_info:
            await template_service.validate_templates([tmp_path / "missing.json"])
        assert isinstance(exc_info.value.first, BundleError)


class TestUploadTemplates:
    async def test_partial_failure(self, template_service: TemplateService, storage,
                                   template_dir: Path) -> None:
        storage.fail_names = ["Child.json", "params.json"]
        bundle = load_bundle(template_dir, "Stack.json")
        plan = UploadPlan.for_bundle(bundle, "bucket", "s/v/templates")

        with pytest.raises(UploadError) as exc_info:
            await template_service.upload_templates(plan)

        results = exc_info.value.results
        assert len(results) == 3
        assert len(results.errors) == 2
        assert len(results.successful) == 1
        assert results.url_for(template_dir / "Stack.json") == \
            "https://s3.example.com/bucket/s/v/templates/Stack.json"
        assert "Access Denied" in str(exc_info.value)

    async def test_progress_callback(self, template_service: TemplateService, template_dir: Path) -> None:
        bundle = load_bundle(template_dir, "Stack.json")
        plan = UploadPlan.for_bundle(bundle, "bucket", "p")
        progress = []

        results = await template_service.upload_templates(
            plan, callback=lambda done, total: progress.append((done, total))
        )

        assert len(results) == 3
        assert progress[-1] == (3, 3)


class TestUploadBundle:
    async def test_uploads_every_file(self, template_service: TemplateService, storage,
                                      template_dir: Path) -> None:
        bundle = load_bundle(template_dir, "Stack.json")
        results = await template_service.upload_bundle(bundle, "bucket", "f/s/v/templates")

        assert not results.has_errors
        assert sorted(storage.uploads) == [
            "f/s/v/templates/Stack.json",
            "f/s/v/templates/nested/Child.json",
            "f/s/v/templates/params.json",
        ]

    async def test_no_upload_after_validation_failure(self, template_service: TemplateService, storage,
                                                      template_dir: Path) -> None:
        (template_dir / "Bad.json").write_text("INVALID")
        bundle = load_bundle(template_dir, "Stack.json")

        with pytest.raises(TemplateValidationError):
            await template_service.upload_bundle(bundle, "bucket", "p")

        assert storage.uploads == {}

    async def test_main_template_url_missing(self, template_service: TemplateService, storage,
                                             template_dir: Path) -> None:
        storage.empty_url_names = ["Stack.json"]
        bundle = load_bundle(template_dir, "Stack.json")

        with pytest.raises(MainTemplateNotFoundError) as exc_info:
            await template_service.upload_bundle(bundle, "bucket", "p")

        assert len(exc_info.value.results) == 3
        assert exc_info.value.results.url_for(template_dir / "Stack.json") is None
