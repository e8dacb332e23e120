"""Integration tests against the running process environment."""

from pathlib import Path

import pytest
from npm_resolver import ConfigPaths
from npm_resolver import DirectoryNotFoundError
from npm_resolver import InstallationLocationResolver
from npm_resolver import InstallScope
from npm_resolver import PackageKind
from npm_resolver import PackageReference
from npm_resolver import PlatformFamily
from npm_resolver import ToolPathConfig


class TestProcessIntegration:
    """Resolve with the default collaborators, as a build host would."""

    @pytest.fixture
    def project(self, tmp_path, monkeypatch):
        """Project directory used as the process working directory."""
        project = tmp_path / "proj"
        project.mkdir()
        monkeypatch.chdir(project)
        for name in ("npm_config_prefix", "NPM_CONFIG_PREFIX", "npm_config_userconfig", "NPM_CONFIG_USERCONFIG"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("NPM_RESOLVER_PATHS_TOOLS", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        return project

    def test_install_then_resolve_workdir(self, project):
        """Test a package installed after a failed lookup is then found."""
        resolver = InstallationLocationResolver()
        package = PackageReference("@foo/bar", "1.2.3")

        with pytest.raises(DirectoryNotFoundError):
            resolver.resolve(package, PackageKind.TOOL, InstallScope.WORKING_DIRECTORY)

        bin_dir = Path("node_modules") / "@foo" / "bar" / "bin"
        bin_dir.mkdir(parents=True)
        (bin_dir / "bar.js").write_text("#!/usr/bin/env node\n")

        files = resolver.resolve(package, PackageKind.TOOL, InstallScope.WORKING_DIRECTORY)
        expected = project / "node_modules" / "@foo" / "bar" / "bin" / "bar.js"
        assert [f.path.resolve() for f in files] == [expected.resolve()]
        assert all(f.exists for f in files)

    def test_tools_scope_from_settings(self, project, tmp_path):
        """Test the tool cache configured in project settings is used."""
        config = ToolPathConfig(ConfigPaths(project=project / ".build" / "settings.yaml"))
        config.set_tool_path(".build/tools")
        package_dir = project / ".build" / "tools" / "node_modules" / "gulp-cli"
        package_dir.mkdir(parents=True)
        (package_dir / "index.js").write_text("")

        resolver = InstallationLocationResolver(configuration=config)
        files = resolver.resolve(PackageReference("gulp-cli"), PackageKind.TOOL, InstallScope.TOOLS_DIRECTORY)
        assert [f.path.name for f in files] == ["index.js"]

    def test_tools_scope_from_environment(self, project, tmp_path, monkeypatch):
        """Test NPM_RESOLVER_PATHS_TOOLS relocates the tool cache."""
        tools = tmp_path / "shared-tools"
        monkeypatch.setenv("NPM_RESOLVER_PATHS_TOOLS", str(tools))

        resolver = InstallationLocationResolver()
        with pytest.raises(DirectoryNotFoundError):
            resolver.resolve(PackageReference("gulp-cli"), PackageKind.TOOL, InstallScope.TOOLS_DIRECTORY)
        assert tools.is_dir()

    def test_global_scope_from_npmrc(self, project, tmp_path):
        """Test the global prefix is read from ~/.npmrc."""
        home = tmp_path / "home"
        home.mkdir()
        prefix = tmp_path / "npm-global"
        (home / ".npmrc").write_text(f"prefix={prefix}\n")
        (prefix / "bin").mkdir(parents=True)
        (prefix / "bin" / "tsc").write_text("")

        resolver = InstallationLocationResolver()
        if resolver.environment.platform_family is PlatformFamily.WINDOWS:
            pytest.skip("POSIX prefix layout")

        files = resolver.resolve(PackageReference("typescript"), PackageKind.TOOL, InstallScope.GLOBAL)
        assert [f.path for f in files] == [prefix / "bin" / "tsc"]
