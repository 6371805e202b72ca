"""HTML rendering of the bills list page."""

from html import escape

from billed.core.formatting import format_status
from billed.core.models import Bill
from billed.views.pages import error_page, layout, loading_page


def row(bill: Bill) -> str:
    """Render one bill as a table row with its preview icon."""
    return f"""<tr>
  <td>{escape(str(bill.type))}</td>
  <td>{escape(bill.name)}</td>
  <td>{bill.date.isoformat()}</td>
  <td>{bill.amount} €</td>
  <td>{escape(format_status(bill.status))}</td>
  <td>
    <div class="icon-actions">
      <div id="eye" data-testid="icon-eye" data-bill-url="{escape(bill.file_url or "")}">Voir</div>
    </div>
  </td>
</tr>"""


def rows(bills: list[Bill]) -> str:
    """Render the table body rows, in the order given."""
    return "\n".join(row(bill) for bill in bills)


def modal() -> str:
    """Render the receipt preview modal shell."""
    return """<div class="modal fade" id="modaleFile" tabindex="-1" role="dialog" aria-hidden="true">
  <div class="modal-dialog modal-dialog-centered modal-lg" role="document">
    <div class="modal-content">
      <div class="modal-header">
        <h5 class="modal-title">Justificatif</h5>
      </div>
      <div class="modal-body"></div>
    </div>
  </div>
</div>"""


def bills_ui(data: list[Bill] | None = None, loading: bool = False, error: str | None = None) -> str:
    """Render the bills page in its loading, error or loaded state."""
    if loading:
        return loading_page()
    if error:
        return error_page(error)
    body = f"""<div class="content-header">
  <div class="content-title">Mes notes de frais</div>
  <form method="post" action="/employee/bills/new-bill">
    <button type="submit" data-testid="btn-new-bill" class="btn btn-primary">Nouvelle note de frais</button>
  </form>
</div>
<div id="data-table">
  <table id="example" class="table table-striped" style="width:100%">
    <thead>
      <tr>
        <th>Type</th>
        <th>Nom</th>
        <th>Date</th>
        <th>Montant</th>
        <th>Statut</th>
        <th>Actions</th>
      </tr>
    </thead>
    <tbody data-testid="tbody">
{rows(data or [])}
    </tbody>
  </table>
</div>
{modal()}"""
    return layout(body, title="Mes notes de frais", active="bills")
