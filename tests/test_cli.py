"""Tests for the command line interface."""

from decimal import Decimal

import pytest

from pocketbook.cli.main import cli


@pytest.fixture
def run(cli_runner, temp_db, user_id):
    """Invoke the CLI against the temporary database as the test user."""

    def invoke(*args, input=None, user=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--user", user or user_id, *args],
            input=input,
        )

    return invoke


def test_help_does_not_touch_database(cli_runner):
    """Test help output lists the command groups."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for name in ("account", "add", "transaction", "debt", "pocket", "overview", "import", "export"):
        assert name in result.output


def test_account_lifecycle(run):
    """Test create, list, rename and delete."""
    created = run("account", "create", "BCP")
    listed = run("account", "list")
    renamed = run("account", "rename", "bcp", "BCP Soles")
    cancelled = run("account", "delete", "BCP Soles", input="n\n")
    deleted = run("account", "delete", "BCP Soles", input="y\n")

    assert created.exit_code == 0
    assert "Created account 'BCP'" in created.output
    assert "BCP" in listed.output and "S/0.00" in listed.output
    assert "Renamed account to 'BCP Soles'" in renamed.output
    assert "Deletion cancelled." in cancelled.output
    assert deleted.exit_code == 0
    assert "Deleted account 'BCP Soles'" in deleted.output
    assert "No accounts found." in run("account", "list").output


def test_duplicate_account_fails(run):
    """Test domain failures exit with status 1."""
    run("account", "create", "BCP")

    result = run("account", "create", "BCP")

    assert result.exit_code == 1
    assert "Error: Account with name 'BCP' already exists" in result.output


def test_add_and_list_transactions(run):
    """Test manual entry and listing."""
    run("account", "create", "BCP")
    run("account", "create", "Cash")

    income = run("add", "--type", "ingreso", "--amount", "S/1,500", "--description", "Salary", "--account", "BCP")
    expense = run(
        "add", "--type", "gasto", "--amount", "45.90", "--description", "Groceries",
        "--account", "BCP", "--date", "2024-03-16",
    )
    transfer = run("add", "--type", "movimiento", "--amount", "200", "--account", "BCP", "--to", "Cash")

    assert income.exit_code == 0
    assert "Amount: S/1,500.00" in income.output
    assert "Category: Deposito" in income.output
    assert expense.exit_code == 0
    assert "Description: From BCP to Cash" in transfer.output

    listed = run("transaction", "list", "--account", "Cash")
    assert "Found 1 transaction(s)" in listed.output
    assert "BCP -> Cash" in listed.output

    balance = run("account", "balance", "BCP")
    assert "BCP: S/1,254.10" in balance.output


def test_add_rejects_bad_input(run):
    """Test invalid amounts and accounts."""
    bad_amount = run("add", "--type", "gasto", "--amount", "lots", "--description", "x")
    bad_account = run("add", "--type", "gasto", "--amount", "5", "--description", "x", "--account", "Nope")
    zero = run("add", "--type", "gasto", "--amount", "0", "--description", "x")

    assert bad_amount.exit_code == 1
    assert "Invalid amount format" in bad_amount.output
    assert bad_account.exit_code == 1
    assert "Account 'Nope' not found" in bad_account.output
    assert zero.exit_code == 1
    assert "Amount must be greater than 0" in zero.output


def test_unknown_account_lists_known_names(run):
    """Test an unknown account name points at the accounts that exist."""
    no_accounts = run("account", "balance", "Nope")
    run("account", "create", "Cash")
    run("account", "create", "BCP")

    unknown = run("account", "balance", "Nope")

    assert no_accounts.exit_code == 1
    assert "No accounts yet" in no_accounts.output
    assert unknown.exit_code == 1
    assert "Account 'Nope' not found" in unknown.output
    assert "Known accounts: BCP, Cash" in unknown.output


def test_transaction_update_reconcile_delete(run, temp_db, user_id):
    """Test editing commands."""
    run("add", "--type", "gasto", "--amount", "10", "--description", "Taxi")
    txn_id = temp_db.list_transactions(user_id)[0].id

    updated = run("transaction", "update", str(txn_id), "--amount", "12")
    reconciled = run("transaction", "reconcile", str(txn_id))
    nothing = run("transaction", "update", str(txn_id))
    deleted = run("transaction", "delete", str(txn_id), "--yes")

    assert f"Updated transaction {txn_id}" in updated.output
    assert "marked as reconciled" in reconciled.output
    assert nothing.exit_code == 1
    assert f"Deleted transaction {txn_id}" in deleted.output
    assert temp_db.list_transactions(user_id) == []


def test_debt_flow(run, temp_db, user_id):
    """Test registering, paying and reporting a debt."""
    added = run("debt", "add", "Ana", "Dinner", "100")
    debt_id = temp_db.list_debts(user_id)[0].id

    too_much = run("debt", "pay", str(debt_id), "150")
    partial = run("debt", "pay", str(debt_id), "40")
    report = run("debt", "report")
    shown = run("debt", "show", str(debt_id))
    full = run("debt", "pay-full", str(debt_id))
    listed = run("debt", "list", "--status", "paid")

    assert f"Registered debt {debt_id} for Ana" in added.output
    assert too_much.exit_code == 1
    assert "Invalid payment amount" in too_much.output
    assert "60.00 still pending" in partial.output
    assert "Total pending for Ana: S/60.00" in report.output
    assert "Original: S/100.00" in shown.output
    assert "Paid: S/40.00" in shown.output
    assert "paid in full" in full.output
    assert "Ana" in listed.output and "Dinner" in listed.output


def test_debt_loan_and_delete(run, temp_db, user_id):
    """Test loans and deleting a debt."""
    run("account", "create", "BCP")
    loan = run("debt", "loan", "Car repair", "300", "--account", "BCP")
    debt_id = temp_db.list_debts(user_id)[0].id
    deleted = run("debt", "delete", str(debt_id), "--yes")

    assert loan.exit_code == 0
    assert deleted.exit_code == 0
    assert "Deleted debt 'Car repair'" in deleted.output
    assert "No debts found." in run("debt", "list").output


def test_pocket_flow(run, temp_db, user_id):
    """Test pockets through the CLI."""
    run("account", "create", "BCP")
    run("add", "--type", "ingreso", "--amount", "500", "--description", "Salary", "--account", "BCP")

    created = run("pocket", "create", "Vacation", "--account", "BCP")
    pocket_id = temp_db.list_pockets(user_id)[0].id
    deposit = run("pocket", "deposit", str(pocket_id), "200")
    too_much = run("pocket", "withdraw", str(pocket_id), "250")
    listed = run("pocket", "list")
    overview = run("overview")
    deleted = run("pocket", "delete", str(pocket_id), "--yes")

    assert created.exit_code == 0
    assert "Pocket balance: S/200.00" in deposit.output
    assert too_much.exit_code == 1
    assert "Vacation" in listed.output and "S/200.00" in listed.output
    assert "Pocket savings" in overview.output
    assert "S/300.00" in overview.output
    assert "200.00 returned" in deleted.output
    assert "BCP: S/500.00" in run("account", "balance", "BCP").output


def test_users_are_isolated(run):
    """Test --user scopes every command."""
    run("account", "create", "BCP", user="ana")

    assert "No accounts found." in run("account", "list", user="luis").output
    assert "BCP" in run("account", "list", user="ana").output


def test_import_and_export(run, tmp_path):
    """Test spreadsheet commands."""
    source = tmp_path / "march.csv"
    source.write_text(
        "Fecha,Descripcion,Ingreso,Egreso\n"
        "2024-03-15,Salary,1500,\n"
        "bad date,Broken,1,\n"
        "2024-03-16,Groceries,,45.90\n",
        encoding="utf-8",
    )
    target = tmp_path / "out.csv"

    imported = run("import", str(source))
    exported = run("export", str(target))

    assert imported.exit_code == 0
    assert "Imported: 2 transactions" in imported.output
    assert "Row 3:" in imported.output
    assert exported.exit_code == 0
    assert "Exported 2 rows" in exported.output
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Fecha,Descripcion,Ingreso,Egreso,Ahorro,Deuda,Neto"
    assert lines[-1] == "Totales,,1500.00,45.90,0.00,0.00,1454.10"
