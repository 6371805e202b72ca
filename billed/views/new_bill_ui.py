"""HTML rendering of the new-bill form."""

from collections.abc import Mapping
from html import escape

from billed.core.models import ExpenseType
from billed.views.pages import layout


def _value(values: Mapping[str, str], name: str) -> str:
    """Render a ``value`` attribute holding what the user entered, if anything."""
    entered = values.get(name)
    return f' value="{escape(entered)}"' if entered else ""


def _selected(option: object, selected: str | None) -> str:
    return " selected" if str(option) == selected else ""


def new_bill_ui(
    error_message: str | None = None,
    values: Mapping[str, str] | None = None,
    form_error: str | None = None,
) -> str:
    """Render the new-bill form.

    ``values`` refills the fields after a rejected submission, ``error_message`` explains a rejected receipt and
    ``form_error`` lists the fields that could not be read.
    """
    values = values or {}
    selected_type = values.get("expense-type")
    options = "\n".join(
        f"          <option{_selected(expense_type, selected_type)}>{escape(str(expense_type))}</option>"
        for expense_type in ExpenseType
    )
    file_error = (
        f'<div class="error-message" data-testid="file-error">{escape(error_message)}</div>' if error_message else ""
    )
    name_value = _value(values, "expense-name")
    form_error_block = (
        f'<div class="error-message" data-testid="form-error">{escape(form_error)}</div>' if form_error else ""
    )
    body = f"""<div class="content-header">
  <div class="content-title">Envoyer une note de frais</div>
</div>
<div class="form-newbill-container content-inner">
  {form_error_block}
  <form data-testid="form-new-bill" method="post" action="/employee/bill/new" enctype="multipart/form-data">
    <div class="col-md-6">
      <label for="expense-type">Type de dépense</label>
      <select required name="expense-type" data-testid="expense-type">
{options}
      </select>
      <label for="expense-name">Nom de la dépense</label>
      <input type="text" name="expense-name" data-testid="expense-name" placeholder="Vol Paris Londres"{name_value} />
      <label for="datepicker">Date</label>
      <input required type="date" name="datepicker" data-testid="datepicker"{_value(values, "datepicker")} />
      <label for="amount">Montant TTC</label>
      <input required type="number" name="amount" data-testid="amount" placeholder="348"{_value(values, "amount")} />
      <label for="vat">TVA</label>
      <input type="number" name="vat" data-testid="vat" placeholder="70"{_value(values, "vat")} />
      <input type="number" name="pct" data-testid="pct" placeholder="20"{_value(values, "pct")} /> %
    </div>
    <div class="col-md-6">
      <label for="commentary">Commentaire</label>
      <textarea name="commentary" data-testid="commentary" rows="3">{escape(values.get("commentary", ""))}</textarea>
      <label for="file">Justificatif</label>
      <input type="file" name="file" accept=".jpg,.jpeg,.png" data-testid="file" />
      {file_error}
    </div>
    <button type="submit" id="btn-send-bill" class="btn btn-primary">Envoyer</button>
  </form>
</div>"""
    return layout(body, title="Envoyer une note de frais", active="new-bill")
