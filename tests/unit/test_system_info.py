from types import SimpleNamespace

from dmc.core.info_report import collect_info, render_info_html


def _wsdl(*names):
    binding = SimpleNamespace(all=lambda: {name: object() for name in names})
    return SimpleNamespace(services={"DmcService": SimpleNamespace(ports={"soap": SimpleNamespace(binding=binding)})})


def test_api_version(dmc, soap):
    soap.respond("systemGetApiVersion", {"version": "2.0"})
    assert dmc.api_version() == "2.0"


def test_api_version_fault(dmc, soap):
    soap.fault("systemGetApiVersion")
    assert dmc.api_version() is False


def test_ecm_version_strips_build_prefix(dmc, soap):
    soap.respond("systemGetEcmVersion", {"version": "Build 6.3.1"})
    assert dmc.ecm_version() == "6.3.1"


def test_functions_lists_wsdl_operations(dmc, soap):
    soap.wsdl = _wsdl("userGet", "groupGet")
    assert dmc.functions() == ["userGet", "groupGet"]


def test_functions_without_operations_is_false(dmc):
    assert dmc.functions() is False


def test_collect_info_active_instance(dmc, soap):
    soap.respond("systemGetApiVersion", "2.0")
    soap.respond("systemGetEcmVersion", "Build 6.3.1")
    soap.wsdl = _wsdl("userGet")

    info = dmc.dmc_info()
    assert info == {
        "System Information": {
            "Status": "Active",
            "SOAP URL": "https://dmc.example.com/api/soap/v2?wsdl",
            "API Version": "2.0",
            "Build": "6.3.1",
            "Available API Functions": ["userGet"],
        },
    }


def test_collect_info_down_instance(dmc, soap):
    soap.fault("systemGetApiVersion")
    soap.fault("systemGetEcmVersion")

    section = collect_info(dmc)["System Information"]
    assert section["Status"] == "Down"
    assert section["API Version"] == ""
    assert section["Available API Functions"] == []


def test_render_info_html_lists_sections_and_escapes():
    html = render_info_html({
        "System Information": {
            "Status": "Active",
            "SOAP URL": "https://dmc.example.com/?a=1&b=2",
            "Available API Functions": ["userGet", "<script>"],
        },
    })
    assert html.startswith("<!DOCTYPE html>")
    assert "<h3>System Information</h3>" in html
    assert "<li>userGet</li>" in html
    assert "&lt;script&gt;" in html
    assert "a=1&amp;b=2" in html
    assert '<td class="e">Status</td><td class="v">Active</td>' in html
