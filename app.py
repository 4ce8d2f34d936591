import os

from rfid_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    # threaded: the SSE stream holds one worker per connected dashboard
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "3000")), threaded=True)
