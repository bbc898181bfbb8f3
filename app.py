from src.school_attendance.school_attendance.main import create_app

app = create_app()

if __name__ == '__main__':
    # The reloader would start a second scheduler in the child process.
    app.run(debug=app.config.get("DEBUG", False), use_reloader=False)
