import opcrash
from opcrash.core import TypeRef
from opcrash.values import library


def test_bootstrap_runs_plugin_register_hooks(tmp_path, monkeypatch) -> None:
    plugin = tmp_path / "opcrash_values_plugin.py"
    plugin.write_text(
        "from opcrash.values import register_values\n"
        "def register():\n"
        "    register_values('long', [2**40])\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setenv("OPCRASH_PLUGINS", " opcrash_values_plugin , ")
    monkeypatch.setattr(opcrash, "_BOOTSTRAPPED", False)
    long_type = TypeRef.parse("long")
    before = library.values_for(long_type)
    try:
        opcrash.bootstrap()
        assert [lit.value for lit in library.values_for(long_type)][-1] == 2**40
    finally:
        library.register(long_type, [lit.value for lit in before], replace=True)
