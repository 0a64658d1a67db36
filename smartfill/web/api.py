from flask import Flask, jsonify, request
from smartfill.evaluator import evaluate

app = Flask(__name__)

@app.route('/')
def home():
    return jsonify({
        "message": "SmartFill API is running"
    })

@app.route('/score', methods=['POST'])
def score_route():
    data = request.get_json(silent=True) or {}
    password = data.get('password', '')
    if not isinstance(password, str):
        return jsonify({'error': 'password must be a string'}), 400
    return jsonify(evaluate(password))

if __name__ == "__main__":
    app.run(debug=True)
