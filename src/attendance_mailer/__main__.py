"""Entry point for 'python -m attendance_mailer'."""

from attendance_mailer.cli import main

if __name__ == "__main__":
    main()
