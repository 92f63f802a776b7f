from importlib import import_module


def test_modules_import():
    for mod in [
        "incidentxl",
        "incidentxl.app",
        "incidentxl.cli",
        "incidentxl.runner",
        "incidentxl.pdf.incident_parser",
        "incidentxl.report.writers",
    ]:
        import_module(mod)


def test_writer_registry():
    writers = import_module("incidentxl.report.writers")
    assert set(writers.WRITERS) == {"xlsx", "txt"}
    assert writers.extension_for("XLSX") == ".xlsx"
