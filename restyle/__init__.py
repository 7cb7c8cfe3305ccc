"""
restyle - Resume Styling by Template Merge

A resume tailoring toolkit: a visual style reference becomes an HTML layout
template with placeholder tokens, resume text becomes a structured record,
and a local engine merges the two into final markup for preview, printing,
and export.

Architecture:
- Intake Context: Validation and normalization of model-extracted records
- Templating Context: Token vocabulary, record structure, presets, merge engine
- Rendering Context: Document shells and record exporters
"""

__version__ = "0.1.0"
