from stockroom import create_app

app = create_app()

if __name__ == "__main__":
    # One process, one thread: inventory state lives on a single in-memory connection.
    app.run(host="0.0.0.0", port=5000, debug=True, use_reloader=False, threaded=False)
