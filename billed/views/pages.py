"""Shared page chrome and the standalone loading, error and login pages."""

from html import escape


def layout(body: str, title: str = "Billed", active: str | None = None) -> str:
    """Wrap page content in the document shell with the vertical navigation bar."""
    window_class = "active-icon" if active == "bills" else ""
    mail_class = "active-icon" if active == "new-bill" else ""
    return f"""<!DOCTYPE html>
<html lang="fr">
  <head>
    <meta charset="utf-8" />
    <title>{escape(title)}</title>
  </head>
  <body>
    <div class="layout">
      <nav class="vertical-navbar">
        <a href="/employee/bills" id="layout-icon1" data-testid="icon-window" class="{window_class}">Notes de frais</a>
        <a href="/employee/bill/new" id="layout-icon2" data-testid="icon-mail" class="{mail_class}">Nouvelle note</a>
        <form method="post" action="/logout"><button type="submit" id="layout-disconnect">Déconnexion</button></form>
      </nav>
      <div class="content">
{body}
      </div>
    </div>
  </body>
</html>"""


def loading_page() -> str:
    """Page shown while bills are being fetched."""
    return layout('<div id="loading">Loading...</div>', active="bills")


def error_page(error: str | None) -> str:
    """Page showing a store error message as-is."""
    body = f"""<div class="content-header">
  <div class="content-title">Erreur</div>
</div>
<div data-testid="error-message">{escape(error or "")}</div>"""
    return layout(body, title="Erreur")


def login_page() -> str:
    """Identity form for employees (no password check)."""
    body = """<form method="post" action="/login" data-testid="form-employee">
  <h2>Employé</h2>
  <label for="employee-email-input">Votre email</label>
  <input type="email" name="email" id="employee-email-input" data-testid="employee-email-input" required />
  <input type="hidden" name="type" value="Employee" />
  <button type="submit" data-testid="employee-login-button">Se connecter</button>
</form>"""
    return layout(body, title="Connexion")
