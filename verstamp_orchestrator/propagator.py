"""
Version propagation orchestrator.

``VersionPropagator.propagate`` runs the whole set-version pipeline:

1. validate the build type and parse the version (nothing written yet)
2. snapshot the verification subset into a fresh temporary directory
3. render and write every artifact target
4. diff the verification subset against the snapshot and count changed
   lines containing the new version

Hard errors abort immediately without rolling back files that were already
written; the snapshot directory is kept so they can be diffed by hand. A
verification mismatch only logs a warning.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional

from .config.loader import PropagationConfig, load_propagation_config
from .config.targets import ArtifactFormat, ArtifactTarget
from .exceptions import ArtifactFileError, ConfigurationError, ExecutionContext, VerstampError
from .logger import ProductionLogger, get_logger
from .manifests import read_manifest, update_template_package, write_text_if_changed
from .renderers import get_renderer
from .run_summary import PropagationResult, VerificationReport, WriteResult
from .snapshots import create_snapshot_dir, save_files, verify_changes
from .version import VersionRecord, parse_version, validate_build_type


class VersionPropagator:
    """
    Writes one version into every configured artifact target.

    The target list comes from ``PropagationConfig``; each artifact is written
    by its own method, which returns a ``WriteResult``.
    """

    def __init__(
        self,
        config: Optional[PropagationConfig] = None,
        logger: Optional[ProductionLogger] = None,
    ):
        self.config = config or load_propagation_config()
        self._owns_logger = logger is None
        self.logger = logger or get_logger(
            log_level=self.config.logging.level,
            log_dir=self.config.logging.log_dir,
            json_file=self.config.logging.json_file,
        )
        self._context = ExecutionContext()

    def close(self) -> None:
        """Release the logger handlers if this propagator created them."""
        if self._owns_logger:
            self.logger.close()

    def propagate(
        self,
        raw_version: str,
        dependency_versions: Optional[Mapping[str, str]],
        build_type: Any,
    ) -> PropagationResult:
        """
        Propagate ``raw_version`` to every artifact target.

        Args:
            raw_version: Version to set, e.g. ``0.75.0``
            dependency_versions: Optional package name -> version overrides
            build_type: ``dry-run``, ``nightly`` or ``release``

        Returns:
            PropagationResult; ``verification.is_verified`` is False when the
            changed-line count did not match (advisory only)

        Raises:
            InvalidBuildTypeError, VersionFormatError, BuildTypeMismatchError:
                before anything is written
            TemplateRenderError, PropertiesUpdateError, ManifestError,
            ArtifactFileError: possibly after other artifacts were written
        """
        self._context = ExecutionContext(
            raw_version=str(raw_version),
            build_type=str(getattr(build_type, "value", build_type)),
            run_id=self.logger.get_run_id(),
        )
        try:
            build_type = validate_build_type(build_type)
            version = parse_version(raw_version, build_type, self.config.policy)
        except VerstampError as e:
            self._log_failure(e)
            raise

        self.logger.info(
            f"Setting version {version.version} ({build_type.value})",
            version=version.version,
            build_type=build_type.value,
            root=str(self.config.root),
        )

        package_name = self.resolve_package_name()

        snapshot_dir = create_snapshot_dir(self.config.snapshot_prefix)
        self._context.snapshot_dir = str(snapshot_dir)
        self.logger.info(f"The tmp versioning folder is {snapshot_dir}", snapshot_dir=str(snapshot_dir))
        self.snapshot(snapshot_dir)

        writes: List[WriteResult] = []
        for target in self.config.source_targets:
            writes.append(self.set_source(target, version))
        writes.append(self.set_package(version, dependency_versions))
        writes.append(self.set_template_package(version, dependency_versions, package_name))
        writes.append(self.set_gradle(version))

        report = self.verify(snapshot_dir, version)
        return PropagationResult(
            version=version,
            build_type=build_type,
            writes=writes,
            verification=report,
            snapshot_dir=snapshot_dir,
        )

    def resolve_package_name(self) -> str:
        """Self-referential template manifest key: config value or library manifest name."""
        if self.config.package_name:
            return self.config.package_name
        target = self.config.target_for(ArtifactFormat.LIBRARY_MANIFEST)
        with self._target_scope(target):
            name = read_manifest(self.config.resolve(target.path)).get("name")
        if not isinstance(name, str) or not name:
            error = ConfigurationError(
                "package_name is not configured and the library manifest has no name",
                context=self._context,
            )
            self._log_failure(error)
            raise error
        return name

    def snapshot(self, snapshot_dir: Path) -> List[Path]:
        files = [t.path for t in self.config.verification_targets]
        saved = save_files(files, self.config.root, snapshot_dir)
        missing = [str(f) for f in files if f not in saved]
        if missing:
            self.logger.warning(
                "Files to verify do not exist yet and were not snapshotted",
                files=missing,
            )
        return saved

    def set_source(self, target: ArtifactTarget, version: VersionRecord) -> WriteResult:
        """Render a source-constant template into its target file."""
        with self._target_scope(target):
            template_path = self.config.resolve(target.template)
            self.logger.debug(f"Rendering {target.template}", target=target.name, template=str(template_path))
            template = self._read(template_path)
            content = get_renderer(target.format).render(template, version)
            return self._write(target, content)

    def set_package(
        self,
        version: VersionRecord,
        dependency_versions: Optional[Mapping[str, str]],
    ) -> WriteResult:
        """Set the library manifest version and apply dependency overrides."""
        target = self.config.target_for(ArtifactFormat.LIBRARY_MANIFEST)
        with self._target_scope(target):
            current = self._read(self.config.resolve(target.path))
            content = get_renderer(target.format).render(current, version, dependency_versions)
            return self._write(target, content)

    def set_template_package(
        self,
        version: VersionRecord,
        dependency_versions: Optional[Mapping[str, str]],
        package_name: str,
    ) -> WriteResult:
        """Point the template manifest at the new version; caller overrides win."""
        target = self.config.target_for(ArtifactFormat.TEMPLATE_MANIFEST)
        version_map = {package_name: version.version, **(dependency_versions or {})}
        with self._target_scope(target):
            result = update_template_package(self.config.resolve(target.path), version_map, target.name)
        self._log_write(result)
        return result

    def set_gradle(self, version: VersionRecord) -> WriteResult:
        """Replace the VERSION_NAME= line of the properties file."""
        target = self.config.target_for(ArtifactFormat.PROPERTIES)
        with self._target_scope(target):
            current = self._read(self.config.resolve(target.path))
            content = get_renderer(target.format).render(current, version)
            return self._write(target, content)

    def verify(self, snapshot_dir: Path, version: VersionRecord) -> VerificationReport:
        files = [t.path for t in self.config.verification_targets]
        report = verify_changes(snapshot_dir, self.config.root, files, version.version)
        if report.is_verified:
            self.logger.info(
                f"Verified {report.matched}/{report.expected} files contain {version.version}",
                **report.to_dict(),
            )
        else:
            # TODO: check source-constant targets field by field, they never hold the version string
            self.logger.warning(
                f"Failed to update all the files: [{', '.join(report.files)}] must have versions in them. "
                f"These files may already have had version {version.version} set.",
                **report.to_dict(),
            )
        return report

    def _read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def _write(self, target: ArtifactTarget, content: str) -> WriteResult:
        path = self.config.resolve(target.path)
        changed = write_text_if_changed(path, content)
        result = WriteResult(target=target.name, path=path, changed=changed)
        self._log_write(result)
        return result

    def _log_write(self, result: WriteResult) -> None:
        state = "updated" if result.changed else "unchanged"
        self.logger.info(f"{result.target}: {state} ({result.path})", **result.to_dict())

    def _log_failure(self, error: VerstampError) -> None:
        self.logger.error(error.message, error=error.to_dict())

    @contextmanager
    def _target_scope(self, target: ArtifactTarget) -> Iterator[None]:
        """Attach run and target details to errors raised while handling ``target``."""
        try:
            yield
        except VerstampError as e:
            self._fill_context(e.context, target)
            self._log_failure(e)
            raise
        except OSError as e:
            error = ArtifactFileError(
                f"Cannot access {Path(e.filename).name if e.filename else target.name}: {e.strerror or e}",
                path=str(e.filename) if e.filename else None,
                original_exception=e,
            )
            self._fill_context(error.context, target)
            self._log_failure(error)
            raise error from e
        except UnicodeDecodeError as e:
            error = ArtifactFileError(
                f"{target.name} is not valid UTF-8: {e.reason} at byte {e.start}",
                original_exception=e,
            )
            self._fill_context(error.context, target)
            self._log_failure(error)
            raise error from e

    def _fill_context(self, ctx: ExecutionContext, target: ArtifactTarget) -> None:
        for name in ("raw_version", "build_type", "run_id", "snapshot_dir"):
            if getattr(ctx, name) is None:
                setattr(ctx, name, getattr(self._context, name))
        ctx.target_name = ctx.target_name or target.name
        ctx.artifact_path = ctx.artifact_path or str(self.config.resolve(target.path))


def propagate(
    raw_version: str,
    dependency_versions: Optional[Mapping[str, str]],
    build_type: Any,
    config: Optional[PropagationConfig] = None,
    logger: Optional[ProductionLogger] = None,
) -> PropagationResult:
    """Functional form of ``VersionPropagator.propagate``."""
    propagator = VersionPropagator(config, logger)
    try:
        return propagator.propagate(raw_version, dependency_versions, build_type)
    finally:
        propagator.close()
