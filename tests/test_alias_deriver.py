"""Tests for the pure alias derivation."""

from __future__ import annotations

import pytest

from core.domain.errors import MalformedApplicationError, MalformedEnvironmentError
from core.domain.models import ApplicationMetadata, Environment
from core.services.alias_deriver import (
    AliasDefaults,
    build_descriptor,
    derive_aliases,
    is_wildcard,
    split_ssh_url,
)


def _env(name: str, domains: list[str], ssh_url: str = "user@host.example.com") -> Environment:
    return Environment(name=name, domains=domains, ssh_url=ssh_url)


class TestSingleSiteHosting:
    def test_scenario_ace_single_environment(self, ace_application, dev_environment):
        bundle = derive_aliases(ace_application, [dev_environment])

        assert bundle.to_dict() == {
            "sitecode": {
                "dev": {
                    "uri": "dev.example.com",
                    "host": "dev.example.com",
                    "options": {},
                    "paths": {"dump-dir": "/mnt/tmp"},
                    "root": "/var/www/html/devuser/docroot",
                    "user": "devuser",
                    "ssh": {"options": "-p 22"},
                }
            }
        }

    @pytest.mark.parametrize("hosting_type", ["ace", "acp"])
    def test_one_alias_per_environment_keyed_by_hosting_id(self, hosting_type):
        app = ApplicationMetadata(hosting_type=hosting_type, hosting_id="realm:mysite")
        envs = [
            _env("dev", ["dev.mysite.com", "dev2.mysite.com"], "mysite.dev@dev.host"),
            _env("test", ["test.mysite.com"], "mysite.test@test.host"),
            _env("prod", ["www.mysite.com"], "mysite.prod@prod.host"),
        ]

        bundle = derive_aliases(app, envs)

        assert bundle.site_ids() == ["mysite"]
        aliases = bundle.aliases_for("mysite")
        assert list(aliases) == ["dev", "test", "prod"]
        assert aliases["dev"].uri == "dev.mysite.com"
        assert aliases["prod"].user == "mysite.prod"
        assert aliases["prod"].host == "prod.host"
        assert aliases["prod"].root == "/var/www/html/mysite.prod/docroot"

    def test_first_domain_wildcard_produces_nothing(self):
        app = ApplicationMetadata(hosting_type="ace", hosting_id="org:site")
        envs = [
            _env("dev", ["*.example.com", "dev.example.com"]),
            _env("ra", ["ra.example.com:*"]),
        ]

        bundle = derive_aliases(app, envs)

        assert not bundle
        assert bundle.to_dict() == {}

    def test_hosting_id_without_site_segment_is_rejected(self, dev_environment):
        app = ApplicationMetadata(hosting_type="ace", hosting_id="nosegment")

        with pytest.raises(MalformedApplicationError):
            derive_aliases(app, [dev_environment])

    def test_environment_without_domains_is_rejected(self, ace_application):
        with pytest.raises(MalformedEnvironmentError) as excinfo:
            derive_aliases(ace_application, [_env("dev", [])])

        assert excinfo.value.environment == "dev"


class TestSiteFactoryHosting:
    def test_scenario_wildcard_domain_is_skipped(self, acsf_application):
        env = _env("01live", ["site1.factory.com", "*.factory.com"], "factory.01live@web.host")

        bundle = derive_aliases(acsf_application, [env])

        assert bundle.site_ids() == ["site1"]
        alias = bundle.get("site1", "01live")
        assert alias is not None
        assert alias.uri == "site1.factory.com"
        assert alias.user == "factory.01live"
        assert alias.host == "web.host"

    def test_one_alias_per_domain_and_environment(self, acsf_application):
        envs = [
            _env("01dev", ["alpha.dev.factory.com", "beta.dev.factory.com", "*.dev.factory.com"], "f.01dev@dev.host"),
            _env("01live", ["alpha.factory.com", "beta.factory.com"], "f.01live@live.host"),
        ]

        bundle = derive_aliases(acsf_application, envs)

        assert sorted(bundle.site_ids()) == ["alpha", "beta"]
        assert list(bundle.aliases_for("alpha")) == ["01dev", "01live"]
        assert bundle.get("beta", "01dev").uri == "beta.dev.factory.com"
        assert bundle.get("beta", "01live").host == "live.host"
        for _, aliases in bundle.items():
            for alias in aliases.values():
                assert "*." not in alias.uri

    def test_port_wildcard_is_filtered_by_descriptor_check(self, acsf_application):
        env = _env("01live", ["gamma.factory.com:*", "delta.factory.com"])

        bundle = derive_aliases(acsf_application, [env])

        assert bundle.site_ids() == ["delta"]

    def test_same_site_twice_in_environment_last_domain_wins(self, acsf_application):
        env = _env("01live", ["shop.factory.com", "shop.example.org"])

        bundle = derive_aliases(acsf_application, [env])

        assert bundle.get("shop", "01live").uri == "shop.example.org"
        assert len(bundle.collisions) == 1
        collision = bundle.collisions[0]
        assert collision.dropped_uri == "shop.factory.com"
        assert collision.kept_uri == "shop.example.org"
        assert any("replaced" in warning for warning in bundle.warnings)

    def test_domain_with_empty_first_label_is_rejected(self, acsf_application):
        with pytest.raises(MalformedEnvironmentError):
            derive_aliases(acsf_application, [_env("01live", [".factory.com"])])


class TestUnsupportedHosting:
    def test_unknown_hosting_model_is_reported(self, dev_environment, caplog):
        app = ApplicationMetadata(hosting_type="legacy", hosting_id="org:site")

        with caplog.at_level("WARNING"):
            bundle = derive_aliases(app, [dev_environment])

        assert not bundle
        assert len(bundle.warnings) == 1
        assert "Unsupported hosting model 'legacy'" in bundle.warnings[0]
        assert "Unsupported hosting model" in caplog.text

    @pytest.mark.parametrize("hosting_type", ["ACE", "Acp", " acsf "])
    def test_hosting_type_must_match_exactly(self, dev_environment, hosting_type):
        app = ApplicationMetadata(hosting_type=hosting_type, hosting_id="org:sitecode")

        bundle = derive_aliases(app, [dev_environment])

        assert not bundle
        assert len(bundle.warnings) == 1
        assert "Unsupported hosting model" in bundle.warnings[0]


class TestSshUrl:
    @pytest.mark.parametrize("ssh_url", ["no-at-sign", "a@b@c", "@host", "user@"])
    def test_malformed_ssh_url_aborts_derivation(self, ace_application, ssh_url):
        envs = [
            _env("dev", ["dev.example.com"], "good@host"),
            _env("prod", ["www.example.com"], ssh_url),
        ]

        with pytest.raises(MalformedEnvironmentError) as excinfo:
            derive_aliases(ace_application, envs)

        assert excinfo.value.environment == "prod"

    def test_split(self):
        assert split_ssh_url(_env("dev", [], "site.dev@host.example.com")) == (
            "site.dev",
            "host.example.com",
        )

    def test_split_uses_raw_value(self):
        assert split_ssh_url(_env("dev", [], " site.dev@host ")) == (" site.dev", "host ")


class TestDescriptor:
    @pytest.mark.parametrize(
        "uri,expected",
        [
            ("*.example.com", True),
            ("example.com:*", True),
            ("www.example.com", False),
            ("example.com:8080", False),
        ],
    )
    def test_is_wildcard(self, uri, expected):
        assert is_wildcard(uri) is expected

    def test_custom_defaults(self):
        defaults = AliasDefaults(
            doc_root_prefix="/srv/www/",
            doc_root_suffix="web",
            ssh_options="-p 2222",
            dump_dir="/tmp/dumps",
        )

        alias = build_descriptor(uri="a.com", remote_host="h", remote_user="u", defaults=defaults)

        assert alias is not None
        assert alias.root == "/srv/www/u/web"
        assert alias.ssh.options == "-p 2222"
        assert alias.paths.dump_dir == "/tmp/dumps"

    def test_defaults_from_settings(self, settings):
        defaults = AliasDefaults.from_settings(settings)

        assert defaults == AliasDefaults()


def test_empty_environment_list_gives_empty_bundle(ace_application):
    bundle = derive_aliases(ace_application, [])

    assert len(bundle) == 0
    assert bundle.warnings == []


def test_derivation_is_repeatable(acsf_application):
    envs = [
        _env("01dev", ["alpha.dev.factory.com", "*.dev.factory.com"], "f.01dev@dev.host"),
        _env("01live", ["alpha.factory.com", "beta.factory.com"], "f.01live@live.host"),
    ]

    first = derive_aliases(acsf_application, envs)
    second = derive_aliases(acsf_application, envs)

    assert first == second
    assert first.to_dict() == second.to_dict()
