"""
AI Productivity ROI: Excel Export
Writes a computed business case to a workbook: Summary, Breakdown, Assumptions.
"""
import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from engines.converters import format_hours, format_money, format_multiple, format_payback

HEADER_FONT = Font(bold=True, color='FFFFFF', size=11)
HEADER_FILL = PatternFill(start_color='3366FE', end_color='3366FE', fill_type='solid')
THIN = Border(left=Side(style='thin'), right=Side(style='thin'),
              top=Side(style='thin'), bottom=Side(style='thin'))


def ws_write(ws, headers, rows):
    for c, h in enumerate(headers, 1):
        cell = ws.cell(row=1, column=c, value=h)
        cell.font = HEADER_FONT; cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal='center'); cell.border = THIN
    for r, row in enumerate(rows, 2):
        for c, val in enumerate(row, 1):
            cell = ws.cell(row=r, column=c, value=val); cell.border = THIN
    for col in ws.columns:
        ml = max(len(str(cell.value or '')) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(ml + 2, 60)


def _flatten(d, prefix=''):
    for k, v in d.items():
        key = f"{prefix}{k}"
        if isinstance(v, dict):
            yield from _flatten(v, key + '.')
        elif isinstance(v, (list, tuple)):
            yield key, ', '.join(str(x) for x in v)
        else:
            yield key, v


def build_workbook(result):
    s = result['summary']; cur = result['currency']
    wb = openpyxl.Workbook()

    ws = wb.active; ws.title = 'Summary'
    ws_write(ws, ['Metric', 'Value'], [
        ['Team', result['team']],
        ['Currency', cur],
        ['Maturity', f"{result['maturity']['level']}/10 ({result['maturity']['label']})"],
        ['Hours saved / employee / week', round(s['baselineHoursSavedPerPersonPerWeek'], 2)],
        ['Hourly rate', round(s['hourlyRate'], 2)],
        ['Total annual value', format_money(s['totalAnnualValue'], cur)],
        ['Total hours saved / year', format_hours(s['totalHoursPerYear'])],
        ['Monthly savings (gross)', format_money(s['monthlySavings'], cur)],
        ['Program cost', format_money(s['programCost'], cur)],
        ['Amortized cost / month', format_money(s['monthlyAmortizedCost'], cur)],
        ['Monthly savings (net)', format_money(s['monthlyNetSavings'], cur)],
        ['Payback', format_payback(s['paybackMonths'], s['paybackStatus'])],
        ['Annual ROI', format_multiple(s['annualROIMultiple'])],
    ])

    ws2 = wb.create_sheet('Breakdown')
    rows = [[b['label'], b['rationale'],
             round(b['hoursPerYear']) if b['hoursPerYear'] is not None else None,
             round(b['annualValue'], 2), round(b['monthlyValue'], 2),
             b['overlapFactor'], round(b['share'] * 100, 1), b['mechanism']]
            for b in result['breakdown']]
    rows.append(['Total', '', round(s['totalHoursPerYear']), round(s['totalAnnualValue'], 2),
                 round(s['monthlySavings'], 2), None, 100.0 if result['breakdown'] else 0.0, ''])
    ws_write(ws2, ['Priority', 'Why it matters', 'Hours / year', 'Value / year', 'Value / month',
                   'Overlap factor', 'Share %', 'Mechanism'], rows)

    ws3 = wb.create_sheet('Assumptions')
    ws_write(ws3, ['Field', 'Value'], [[k, v] for k, v in _flatten(result['assumptions'])])
    return wb


def export_business_case(result, target):
    """Save the workbook to a path or a binary file-like object."""
    wb = build_workbook(result)
    wb.save(target)
    return target
