# coursehub/services/email/templates.py
from datetime import datetime
from html import escape
import re

from ...config import settings

def strip_html(html: str) -> str:
    """Plain-text fallback for an HTML body"""
    text = re.sub(r"<style[^>]*>.*?</style>", "", html, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<script[^>]*>.*?</script>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<[^>]+>", "", text)
    return re.sub(r"\s+", " ", text).strip()

def login_url(user_type: str) -> str:
    if user_type == "admin":
        return f"{settings.FRONTEND_URL}/admin/login"
    if user_type == "staff":
        return f"{settings.FRONTEND_URL}/staff/login"
    return f"{settings.FRONTEND_URL}/login"

def _layout(title: str, body: str) -> str:
    year = datetime.utcnow().year
    platform = escape(settings.PLATFORM_NAME)
    support = escape(settings.SUPPORT_EMAIL)
    return f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>{escape(title)} - {platform}</title></head>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; background-color: #f4f7fa;">
  <table role="presentation" style="width: 600px; margin: 40px auto; background: #ffffff; border-radius: 12px;">
    <tr><td style="padding: 32px 40px;"><h1 style="margin: 0;">{platform}</h1></td></tr>
    <tr><td style="padding: 0 40px 32px;">{body}</td></tr>
    <tr><td style="padding: 24px 40px; color: #888888; font-size: 13px;">
      Need help? Contact <a href="mailto:{support}">{support}</a><br>
      &copy; {year} {platform}. All rights reserved.
    </td></tr>
  </table>
</body>
</html>"""

def welcome_email_subject(user_type: str) -> str:
    if user_type == "staff":
        return f"Welcome to the {settings.PLATFORM_NAME} Teaching Team"
    return f"Welcome to {settings.PLATFORM_NAME}"

def welcome_email_template(first_name: str, last_name: str, email: str, user_type: str) -> str:
    full_name = escape(f"{first_name} {last_name}")
    if user_type == "staff":
        intro = "Your staff account is ready. You can now create courses and share materials with your students."
    else:
        intro = "Your student account is ready. Browse the catalog and enroll in your first course."
    body = f"""
      <h2>Welcome aboard, {full_name}!</h2>
      <p>{intro}</p>
      <p>You signed up with <strong>{escape(email)}</strong>.</p>
      <p><a href="{login_url(user_type)}">Log in to your account</a></p>"""
    return _layout("Welcome", body)

def password_reset_email_subject() -> str:
    return f"Password Reset Code - {settings.PLATFORM_NAME}"

def password_reset_email_template(
    first_name: str,
    last_name: str,
    reset_code: str,
    expiry_minutes: int,
    user_type: str,
) -> str:
    full_name = escape(f"{first_name} {last_name}")
    body = f"""
      <h2>Hi {full_name},</h2>
      <p>We received a request to reset your password for your {escape(user_type)} account.
      Use the code below to continue:</p>
      <p style="font-size: 32px; letter-spacing: 8px; font-weight: bold;">{escape(reset_code)}</p>
      <p>This code expires in {expiry_minutes} minutes.</p>
      <p>If you didn't request a password reset, you can ignore this email.</p>
      <p><a href="{login_url(user_type)}">Back to login</a></p>"""
    return _layout("Password Reset", body)

def enrollment_email_subject(course_title: str) -> str:
    return f"Enrollment Confirmed: {course_title} - {settings.PLATFORM_NAME}"

def enrollment_email_template(
    student_name: str,
    course_title: str,
    course_instructor: str,
    course_duration: str,
    enrolled_at: datetime,
) -> str:
    formatted_date = enrolled_at.strftime("%B %d, %Y")
    body = f"""
      <h2>Congratulations, {escape(student_name)}!</h2>
      <p>You are now enrolled in:</p>
      <p><strong>{escape(course_title)}</strong></p>
      <ul>
        <li>Instructor: {escape(course_instructor)}</li>
        <li>Duration: {escape(course_duration)}</li>
        <li>Enrolled on: {formatted_date}</li>
      </ul>
      <p><a href="{settings.FRONTEND_URL}/dashboard">Go to your dashboard</a></p>"""
    return _layout("Enrollment Confirmation", body)
