"""System information report for a DMC instance.

``collect_info`` gathers the data; ``render_info_html`` turns it into a
standalone HTML page. Callers decide where the page goes.
"""
from __future__ import annotations
from typing import Any, Dict

from jinja2 import Environment, select_autoescape

INFO_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta name="robots" content="noindex,nofollow,noarchive">
<title>{{ title }}</title>
<style type="text/css">
body {background-color: #ffffff; color: #000000; font-family: sans-serif;}
table {border-collapse: collapse; width: 600px; margin-left: auto; margin-right: auto;}
td, th {border: 1px solid #000000; font-size: 75%; padding: 5px;}
h1 {font-size: 150%;}
.center {text-align: center;}
.e {background-color: #000000; font-weight: bold; color: #ffcc00; text-align: right; vertical-align: top;}
.h {background-color: #000000; font-weight: bold; color: #ffcc00;}
.v {background-color: #cccccc; color: #000000; text-align: left;}
</style>
</head>
<body><div class="center">
<table><tr class="h"><td><h1>{{ title }}</h1></td></tr></table>
{% for section, rows in info.items() %}
<h3>{{ section }}</h3>
<table>
{% for key, value in rows.items() %}
{% if value is iterable and value is not string %}
<tr><td class="e">{{ key }}</td><td class="v"><ul>{% for item in value %}<li>{{ item }}</li>{% endfor %}</ul></td></tr>
{% else %}
<tr><td class="e">{{ key }}</td><td class="v">{{ value }}</td></tr>
{% endif %}
{% endfor %}
</table>
{% endfor %}
</div></body>
</html>
"""

_environment = Environment(autoescape=select_autoescape(default=True, default_for_string=True), trim_blocks=True, lstrip_blocks=True)


def collect_info(dmc) -> Dict[str, Dict[str, Any]]:
    """Gather status, endpoint, versions and operation names.
    
    Args:
        dmc: DMC facade (or any object with api_version, ecm_version,
            functions and soap_url)
            
    Returns:
        Mapping of section title to key/value rows
    """
    api_version = dmc.api_version()
    functions = dmc.functions()
    return {
        "System Information": {
            "Status": "Active" if api_version else "Down",
            "SOAP URL": dmc.soap_url,
            "API Version": api_version if api_version else "",
            "Build": dmc.ecm_version() or "",
            "Available API Functions": functions if functions else [],
        },
    }


def render_info_html(info: Dict[str, Dict[str, Any]], title: str = "Digital Messaging Center") -> str:
    """Render collected info as an HTML page."""
    return _environment.from_string(INFO_TEMPLATE).render(info=info, title=title)
