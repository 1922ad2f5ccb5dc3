import io

import pytest

from confz import (
    CLASSPATH,
    DEBUG,
    STANDARD_OPTIONS,
    WRITEPATH,
    Config,
    LayeredProperties,
    OptionGroup,
    PropertiesFormatError,
)


def test_set_property_round_trip(config):
    assert config.set_property("cp", "lib/a.jar") is None
    assert config.get_value("cp") == "lib/a.jar"
    assert config.set_property("cp", "lib/b.jar") == "lib/a.jar"


def test_set_default_property(config):
    assert config.set_property("out", "build", set_default=True) is None
    assert config.get_value("out") == "build"
    assert not config.is_set("out")
    assert config.is_present("out")


def test_get_value_with_default(config):
    assert config.get_value("missing") is None
    assert config.get_value("missing", "x") == "x"


def test_set_defaults_preserves_explicit_values():
    config = Config({"a": "1", "b": "2"})
    config.set_property("a", "explicit")
    config.set_defaults({"a": "10", "c": "30"})
    assert config.get_value("a") == "explicit"
    assert config.get_value("b") is None
    assert config.get_value("c") == "30"
    config.clear_values()
    assert config.get_value("a") == "10"
    assert not config.is_set("a")


def test_clear_values_keeps_defaults():
    config = Config({"a": "1"})
    config.set_property("b", "2")
    config.clear_values()
    assert config.get_value("a") == "1"
    assert config.get_value("b") is None


def test_add_properties_replaces_existing_keys(config):
    config.set_property("cp", "old")
    config.add_properties(io.StringIO("cp=new\nout = classes\n"))
    assert config.get_value("cp") == "new"
    assert config.get_value("out") == "classes"
    assert config.is_set("out")


def test_add_properties_with_prefix(config):
    config.add_properties(io.StringIO("target=main\ndepth=3\n"), "wcet")
    assert config.get_value("wcet.target") == "main"
    assert config.get_value("wcet.depth") == "3"
    assert not config.is_present("target")
    assert not config.is_present("depth")


def test_add_properties_with_empty_prefix(config):
    config.add_properties(io.StringIO("target=main\n"), "")
    assert config.get_value("target") == "main"


def test_add_properties_malformed(config):
    with pytest.raises(IOError):
        config.add_properties(io.StringIO("a=\\uZZZZ\n"))
    with pytest.raises(PropertiesFormatError):
        config.add_properties(io.StringIO("a=\\u12\n"))


def test_add_properties_file(config, tmp_path):
    path = tmp_path / "tool.properties"
    path.write_text("# generated\ncp=lib\n", encoding="latin-1")
    config.add_properties_file(path, "app")
    assert config.get_value("app.cp") == "lib"


def test_add_properties_file_missing(config, tmp_path):
    with pytest.raises(OSError):
        config.add_properties_file(tmp_path / "missing.properties")


def test_command_line_overrides_property_stream(config):
    config.add_option(CLASSPATH)
    config.add_properties(io.StringIO("cp=from-file\n"))
    assert config.get_option(CLASSPATH) == "from-file"
    config.parse_arguments(["--cp", "from-args"])
    assert config.get_option(CLASSPATH) == "from-args"


def test_standard_options(config):
    config.add_options(STANDARD_OPTIONS)
    config.add_options([CLASSPATH, WRITEPATH])
    assert config.parse_arguments(["-h", "--debug"]) == []
    assert config.get_option(DEBUG) is True
    assert config.get_option(CLASSPATH) == "."
    assert config.get_option(WRITEPATH) == "out"
    config.check_options()


def test_accessors(config):
    assert isinstance(config.options, OptionGroup)
    assert isinstance(config.properties, LayeredProperties)
    assert config.options.config is config


def test_dump_configuration_lists_all_properties():
    config = Config({"a": "1"})
    config.set_property("b", "2")
    assert config.dump_configuration(1) == " {:<20} ==> 1\n {:<20} ==> 2\n".format("a", "b")


def test_dump_configuration_differs_from_option_dump(config):
    config.add_option(CLASSPATH)
    config.set_property("unregistered", "x")
    assert "unregistered" in config.dump_configuration(0)
    assert "unregistered" not in config.options.dump_configuration(0)
    assert "cp" in config.options.dump_configuration(0)
    assert "cp" not in config.dump_configuration(0)
