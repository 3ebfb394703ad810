"""
Tests for profile path resolution.
"""

from cookstack.profile import Profile


class TestProfile:
    """Test cases for Profile."""

    def test_defaults_from_environment(self, isolated_home):
        profile = Profile.current()

        assert profile.name == "default"
        assert profile.data_root == isolated_home / "default"
        assert profile.cookbooks_dir.is_dir()
        assert profile.logs_dir.is_dir()
        assert profile.log_file == profile.logs_dir / "cookstack.log"
        assert profile.default_cookbook == profile.cookbooks_dir / "default.cookbook"

    def test_named_profile(self, isolated_home, monkeypatch):
        monkeypatch.setenv("COOKSTACK_PROFILE", "family")
        profile = Profile()

        assert profile.name == "family"
        assert profile.default_cookbook == isolated_home / "family" / "cookbooks" / "family.cookbook"

    def test_explicit_home(self, tmp_path):
        profile = Profile("work", home=tmp_path / "elsewhere")
        assert profile.data_root == tmp_path / "elsewhere" / "work"

    def test_cookbook_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COOKSTACK_COOKBOOK", str(tmp_path / "mine.cookbook"))
        assert Profile().default_cookbook == tmp_path / "mine.cookbook"

    def test_cookbook_path_suffix(self):
        profile = Profile()
        assert profile.cookbook_path("lara") == profile.cookbooks_dir / "lara.cookbook"
        assert profile.cookbook_path("lara.cookbook") == profile.cookbooks_dir / "lara.cookbook"

    def test_list_cookbooks(self):
        profile = Profile()
        (profile.cookbooks_dir / "b.cookbook").write_text("")
        (profile.cookbooks_dir / "a.cookbook").write_text("")
        (profile.cookbooks_dir / "notes.txt").write_text("")

        assert [p.name for p in profile.list_cookbooks()] == ["a.cookbook", "b.cookbook"]

    def test_repr(self):
        assert str(Profile("x")) == "Profile(x)"
