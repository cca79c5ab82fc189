# Lets the export script be imported as scripts.export_journal
