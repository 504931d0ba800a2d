"""
Transaction CLI Visualizer
==========================

Rich console rendering of a decoded transaction, for inspecting raw
transactions by eye. It shows:

- **Summary panel**: txid, wtxid, version, segwit marker/flag, lock time,
  size, virtual size and weight.

- **Inputs table**: previous outpoint, script_sig, sequence and the
  witness stack of each input.

- **Outputs table**: amount (in satoshis and BTC), script type, address
  and the raw script_pubkey.

- **Raw components table**: every wire field as the hex it occupies in
  the input, compact-size prefixes included (see
  ``txcodec.utils.components``).

The visualizer never modifies the transaction; it is purely a read-only
presentation layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from txcodec.core.params import SATOSHIS_PER_BTC

if TYPE_CHECKING:
    from txcodec.core.transaction import Transaction


def _truncate_hex(h: str, length: int = 64) -> str:
    """Shorten a long hex string, keeping its head and tail."""
    if len(h) <= length:
        return h
    half = (length - 3) // 2
    return f"{h[:half]}...{h[-half:]}"


def format_btc(amount: int) -> str:
    """Render a satoshi amount as a BTC string with 8 decimals."""
    whole, frac = divmod(amount, SATOSHIS_PER_BTC)
    return f"{whole}.{frac:08d} BTC"


class TransactionVisualizer:
    """
    Rich CLI visualizer for decoded transactions.

    Attributes:
        console: A ``rich.console.Console`` used for all output.
        network: Network used to render output addresses.
    """

    def __init__(self, console: Optional[Console] = None, network: str = 'mainnet') -> None:
        self.console = console if console is not None else Console()
        self.network = network

    def print_transaction(self, tx: "Transaction") -> None:
        """Print the summary panel followed by the inputs and outputs tables."""
        self.print_summary(tx)
        self.print_inputs(tx)
        self.print_outputs(tx)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def print_summary(self, tx: "Transaction") -> None:
        info_lines = [
            f"[bold]TXID:[/bold]         {tx.txid}",
            f"[bold]WTXID:[/bold]        {tx.wtxid}",
            f"[bold]Version:[/bold]      {tx.version}",
        ]
        if tx.is_segwit:
            info_lines.append(
                f"[bold]Segwit:[/bold]       marker {tx.marker:02x}, flag {tx.flag:02x}"
            )
        else:
            info_lines.append("[bold]Segwit:[/bold]       no")
        info_lines.extend([
            f"[bold]Lock Time:[/bold]    {tx.lock_time}",
            f"[bold]Size:[/bold]         {tx.size:,} bytes",
            f"[bold]Virtual Size:[/bold] {tx.vsize:,} vbytes",
            f"[bold]Weight:[/bold]       {tx.weight:,} WU",
            f"[bold]Total Out:[/bold]    {format_btc(tx.total_output_value())}",
        ])

        self.console.print(Panel(
            "\n".join(info_lines),
            title="Transaction",
            border_style="cyan",
        ))

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def print_inputs(self, tx: "Transaction") -> None:
        table = Table(
            title=f"Inputs ({len(tx.inputs)})",
            show_header=True,
            header_style="bold magenta",
            border_style="magenta",
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Previous Output", style="green")
        table.add_column("Script Sig", style="yellow")
        table.add_column("Sequence", justify="right")
        table.add_column("Witness", style="cyan")

        for i, txin in enumerate(tx.inputs):
            if txin.witness is None:
                witness = "-"
            elif not txin.witness:
                witness = "(empty)"
            else:
                witness = "\n".join(
                    f"{j}: {_truncate_hex(item.hex(), 32)}"
                    for j, item in enumerate(txin.witness)
                )

            table.add_row(
                str(i),
                f"{txin.previous_txid_hex}:{txin.previous_vout}",
                _truncate_hex(txin.script_sig.hex(), 32) or "-",
                f"0x{txin.sequence:08x}",
                witness,
            )

        self.console.print(table)

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def print_outputs(self, tx: "Transaction") -> None:
        table = Table(
            title=f"Outputs ({len(tx.outputs)})",
            show_header=True,
            header_style="bold blue",
            border_style="blue",
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Amount (sat)", justify="right", style="bold white")
        table.add_column("Amount", justify="right", style="cyan")
        table.add_column("Type", style="yellow")
        table.add_column("Address", style="green")
        table.add_column("Script PubKey", style="dim")

        for i, txout in enumerate(tx.outputs):
            address = txout.get_address(self.network)
            table.add_row(
                str(i),
                f"{txout.amount:,}",
                format_btc(txout.amount),
                txout.script_type,
                address or "-",
                _truncate_hex(txout.script_pubkey.hex(), 32),
            )

        self.console.print(table)

    # ------------------------------------------------------------------
    # Raw components
    # ------------------------------------------------------------------

    def print_components(self, components: dict) -> None:
        """
        Print the wire fields from ``raw_components()`` in order, one row
        per field, with the full hex of each.
        """
        table = Table(
            title="Raw Transaction Components",
            show_header=True,
            header_style="bold green",
            border_style="green",
        )
        table.add_column("Field", style="bold")
        table.add_column("Hex", overflow="fold")

        table.add_row("Version", components['version'])
        if components['marker'] is not None:
            table.add_row("Marker", components['marker'])
            table.add_row("Flag", components['flag'])

        table.add_row("Input Count", components['input_count'])
        for i, txin in enumerate(components['inputs']):
            table.add_row(f"Input {i} TXID", txin['txid'])
            table.add_row(f"Input {i} VOUT", txin['vout'])
            table.add_row(f"Input {i} Script Sig Size", txin['script_sig_size'])
            table.add_row(f"Input {i} Script Sig", txin['script_sig'] or "-")
            table.add_row(f"Input {i} Sequence", txin['sequence'])

        table.add_row("Output Count", components['output_count'])
        for i, txout in enumerate(components['outputs']):
            table.add_row(f"Output {i} Amount", txout['amount'])
            table.add_row(f"Output {i} Script PubKey Size", txout['script_pubkey_size'])
            table.add_row(f"Output {i} Script PubKey", txout['script_pubkey'])

        for i, stack in enumerate(components['witness'] or []):
            table.add_row(f"Witness {i} Stack Items", stack['stack_items'])
            for j, item in enumerate(stack['items']):
                table.add_row(f"Witness {i} Item {j} Size", item['size'])
                table.add_row(f"Witness {i} Item {j} Data", item['item'])

        table.add_row("Lock Time", components['lock_time'])
        self.console.print(table)
