#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# scenario_export.py
# Excel export of the saved-scenario comparison.

from __future__ import annotations
import datetime, io
from typing import Dict, List, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from config.parameters import STAGES, StageSpec
from simulation.state import Scenario

SUMMARY_HEADERS = ["Cenário", "Modelo", "Pred. Modelo (%)", "Pred. Ensemble (%)"]


def _now_ts() -> str:
    return datetime.datetime.now().strftime("%Y%m%d_%H%M%S")

def export_filename(prefix: str = "cenarios") -> str:
    return f"{prefix}_{_now_ts()}.xlsx"

def _write_header(ws, headers: List[str]):
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)

def _autosize(ws):
    for idx, col in enumerate(ws.iter_cols(values_only=True), start=1):
        width = max(len(str(v)) for v in col if v is not None) if any(v is not None for v in col) else 8
        ws.column_dimensions[get_column_letter(idx)].width = min(max(10, width + 2), 40)

def _group_by_stage(scenarios: Sequence[Scenario]) -> Dict[str, List[Scenario]]:
    groups: Dict[str, List[Scenario]] = {}
    for s in scenarios:
        groups.setdefault(s.stage_id, []).append(s)
    return groups


def build_scenarios_workbook(scenarios: Sequence[Scenario],
                             stages: Mapping[str, StageSpec] = STAGES) -> bytes:
    """
    Summary sheet plus one sheet per stage listing each scenario's inputs.
    Returns the .xlsx file as bytes.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Resumo"
    _write_header(ws, SUMMARY_HEADERS)
    for s in scenarios:
        stage = stages.get(s.stage_id)
        ws.append([
            s.label,
            stage.name if stage else s.stage_id,
            round(s.stage_prediction, 4),
            round(s.ensemble_prediction, 4),
        ])
    _autosize(ws)

    for stage_id, group in _group_by_stage(scenarios).items():
        stage = stages.get(stage_id)
        if stage is None:
            continue
        sheet = wb.create_sheet(title=stage.name[:31])
        _write_header(sheet, ["Cenário"] + [f"{f.name} ({f.unit})" for f in stage.features])
        for s in group:
            sheet.append([s.label] + [s.values.get(f.id) for f in stage.features])
        _autosize(sheet)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
