import textwrap

import pytest

from podcast_rssgen.config import (
    ConfigurationError,
    MappingSettingsSource,
    XmlSettingsSource,
    load_settings,
    read_bool,
    read_text,
)

from conftest import base_settings


def test_xml_settings_source_reads_app_settings(tmp_path):
    config_file = tmp_path / "App.config"
    config_file.write_text(
        textwrap.dedent(
            """\
            <?xml version="1.0" encoding="utf-8"?>
            <configuration>
              <appSettings>
                <add key="PodcastTitle" value="Tom &amp; Jerry" />
                <add key="Minify" value="True" />
                <add value="orphan" />
              </appSettings>
            </configuration>
            """
        ),
        encoding="utf-8",
    )

    source = XmlSettingsSource(str(config_file))

    assert source.get("PodcastTitle") == "Tom & Jerry"
    assert source.get("Minify") == "True"
    assert source.get("Missing") is None


def test_xml_settings_source_accepts_bare_app_settings_root(tmp_path):
    config_file = tmp_path / "settings.xml"
    config_file.write_text(
        '<appSettings><add key="Language" value="en" /></appSettings>',
        encoding="utf-8",
    )

    assert XmlSettingsSource(str(config_file)).get("Language") == "en"


def test_xml_settings_source_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        XmlSettingsSource(str(tmp_path / "nope.config"))


def test_xml_settings_source_invalid_xml_raises(tmp_path):
    config_file = tmp_path / "App.config"
    config_file.write_text("<configuration><appSettings>", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="not valid XML"):
        XmlSettingsSource(str(config_file))


def test_xml_settings_source_missing_section_raises(tmp_path):
    config_file = tmp_path / "App.config"
    config_file.write_text("<configuration />", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="appSettings"):
        XmlSettingsSource(str(config_file))


def test_read_text_html_encodes_values():
    source = MappingSettingsSource({"Title": "<b>Tom & 'Jerry'</b>"})

    assert str(read_text(source, "Title")) == "&lt;b&gt;Tom &amp; &#39;Jerry&#39;&lt;/b&gt;"


def test_read_text_missing_key_is_empty():
    assert str(read_text(MappingSettingsSource({}), "Title")) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("TRUE", True), (" False ", False), ("false", False)],
)
def test_read_bool_is_case_insensitive(raw, expected):
    assert read_bool(MappingSettingsSource({"Flag": raw}), "Flag") is expected


def test_read_bool_missing_required_key_raises():
    with pytest.raises(ConfigurationError, match="Missing required boolean"):
        read_bool(MappingSettingsSource({}), "Flag")


def test_read_bool_missing_key_uses_default():
    assert read_bool(MappingSettingsSource({}), "Flag", default=True) is True


def test_read_bool_rejects_other_values():
    with pytest.raises(ConfigurationError, match="'true' or 'false'"):
        read_bool(MappingSettingsSource({"Flag": "yes"}), "Flag", default=False)


def test_load_settings_populates_all_fields():
    source = MappingSettingsSource(
        base_settings(
            "/srv/a&b",
            Explicit="true",
            Minify="True",
            PodcastTitle="Q&A Hour",
            SkipUnreadableFiles="true",
        )
    )

    settings = load_settings(source)

    assert settings.directory_path == "/srv/a&b"
    assert str(settings.podcast_title) == "Q&amp;A Hour"
    assert settings.explicit is True
    assert settings.minify is True
    assert settings.backup_existing_feed_first is False
    assert settings.file_extension_filter == ".mp3"
    assert settings.output_filename == "feed.xml"
    assert settings.skip_unreadable_files is True
    assert settings.auto_close is False
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_load_settings_missing_core_boolean_is_fatal():
    values = base_settings()
    del values["BackupExistingFeedFirst"]

    with pytest.raises(ConfigurationError, match="BackupExistingFeedFirst"):
        load_settings(MappingSettingsSource(values))


def test_load_settings_missing_text_values_default_to_empty():
    values = base_settings()
    del values["Copyright"]
    del values["FileExtensionFilter"]

    settings = load_settings(MappingSettingsSource(values))

    assert str(settings.copyright) == ""
    assert settings.file_extension_filter == ""


def test_load_settings_requires_output_filename():
    with pytest.raises(ConfigurationError, match="OutputFilename"):
        load_settings(MappingSettingsSource(base_settings(OutputFilename="")))


def test_load_settings_resolves_log_file_relative_to_settings_file(tmp_path):
    config_file = tmp_path / "App.config"
    config_file.write_text(
        "<configuration><appSettings>"
        + "".join(
            f'<add key="{key}" value="{value}" />'
            for key, value in base_settings(LogFile="logs/run.log").items()
        )
        + "</appSettings></configuration>",
        encoding="utf-8",
    )

    settings = load_settings(XmlSettingsSource(str(config_file)))

    assert settings.log_file == str((tmp_path / "logs" / "run.log").resolve())
