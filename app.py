"""
AI Productivity ROI: Flask API Server
One in-memory calculator session: created from defaults, edited field by
field, recomputed on every change, discarded on reset.
"""
import io
import logging
import os
import traceback
from flask import Flask, jsonify, request, send_file
from engines.assumptions import (MAX_INPUT, PRIORITY_META, Priority, TEAMS, CURRENCIES,
                                 assumptions_to_dict, build_assumptions,
                                 toggle_priority, update_assumptions)
from engines.business_case import run_business_case
from engines.errors import InvalidInput
from engines.export import export_business_case
from engines.maturity import run_maturity
from engines.parameters import load_parameters

app = Flask(__name__)

STATE = {
    'model': None, 'assumptions': None, 'results': None, 'loaded': False,
}


def _reset_session():
    STATE['model'] = load_parameters()
    STATE['assumptions'] = build_assumptions(model=STATE['model'])
    STATE['results'] = run_business_case(STATE['assumptions'], STATE['model'])
    STATE['loaded'] = True


def _recompute():
    STATE['results'] = run_business_case(STATE['assumptions'], STATE['model'])
    return STATE['results']


@app.before_request
def _ensure_loaded():
    if not STATE['loaded'] and not STATE.get('_load_error'):
        try:
            _reset_session()
            logging.info("ROI calculator session initialised")
        except Exception as e:
            STATE['_load_error'] = f"{type(e).__name__}: {e}"
            logging.error(f"Calculator load failed: {STATE['_load_error']}")
            traceback.print_exc()


def _body():
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidInput('body', f"expected a JSON object, got {type(body).__name__}")
    return body


@app.errorhandler(InvalidInput)
def _invalid_input(e):
    return jsonify({'status': 'error', 'field': e.field, 'message': str(e)}), 400


def _not_loaded():
    return jsonify({'error': 'Not loaded', 'reason': STATE.get('_load_error', 'Unknown')}), 503


# ══════════════════════════════════════════════════════════════
#  ROUTES
# ══════════════════════════════════════════════════════════════

@app.route('/')
def index():
    return jsonify({
        'name': 'AI at Work: Human Productivity ROI',
        'loaded': STATE['loaded'],
        'endpoints': sorted(str(r) for r in app.url_map.iter_rules() if str(r).startswith('/api')),
    })


@app.route('/api/priorities')
def api_priorities():
    return jsonify({
        'priorities': [{'key': p.value, **PRIORITY_META[p]} for p in Priority],
        'maxPriorities': STATE['model']['maxPriorities'] if STATE['loaded'] else None,
        'teams': TEAMS,
        'currencies': list(CURRENCIES),
    })


@app.route('/api/maturity/<int:level>')
def api_maturity(level):
    if not STATE['loaded']: return _not_loaded()
    employees = request.args.get('employees', STATE['assumptions'].employees_in_scope, type=int)
    if employees > MAX_INPUT:
        raise InvalidInput('employees', f"must be at most {MAX_INPUT:g}, got {employees}")
    return jsonify(run_maturity(level, employees, STATE['model']))


@app.route('/api/assumptions', methods=['GET'])
def api_get_assumptions():
    if not STATE['loaded']: return _not_loaded()
    return jsonify(assumptions_to_dict(STATE['assumptions']))


@app.route('/api/assumptions', methods=['POST'])
def api_update_assumptions():
    """Field-level update: any subset of the assumptions payload, params merged per priority."""
    if not STATE['loaded']: return _not_loaded()
    STATE['assumptions'] = update_assumptions(STATE['assumptions'], _body(), STATE['model'])
    return jsonify({'status': 'ok', 'results': _recompute()})


@app.route('/api/priorities/toggle', methods=['POST'])
def api_toggle_priority():
    if not STATE['loaded']: return _not_loaded()
    key = _body().get('priority')
    if not key:
        return jsonify({'status': 'error', 'message': 'priority required'}), 400
    STATE['assumptions'] = toggle_priority(STATE['assumptions'], key, STATE['model'])
    return jsonify({'status': 'ok', 'results': _recompute()})


@app.route('/api/reset', methods=['POST'])
def api_reset():
    """Discard the session and start again from defaults."""
    try:
        STATE['loaded'] = False
        STATE['_load_error'] = None
        _reset_session()
        return jsonify({'status': 'ok', 'results': STATE['results']})
    except Exception as e:
        traceback.print_exc()
        return jsonify({'status': 'error', 'message': str(e)}), 500


@app.route('/api/results')
def api_results():
    if not STATE['loaded']: return _not_loaded()
    return jsonify(STATE['results'])


@app.route('/api/calculate', methods=['POST'])
def api_calculate():
    """Stateless: full assumptions in, results out. The session is untouched."""
    if not STATE['loaded']: return _not_loaded()
    body = _body()
    if 'maturityLevel' not in body:
        raise InvalidInput('maturityLevel', 'value is required')
    assumptions = build_assumptions(body, model=STATE['model'])
    return jsonify({'status': 'ok', 'results': run_business_case(assumptions, STATE['model'])})


@app.route('/api/export')
def api_export():
    """Export the session business case to Excel."""
    if not STATE['loaded']: return _not_loaded()
    try:
        buf = export_business_case(STATE['results'], io.BytesIO())
        buf.seek(0)
        return send_file(buf, as_attachment=True, download_name='AI_Productivity_ROI.xlsx',
                         mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
    except Exception as e:
        traceback.print_exc()
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    app.run(debug=False, host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
