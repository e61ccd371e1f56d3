"""
Shipment business layer.

- shipment_draft.py     - client-held scanning session (ShipmentDraft / ScanRecord)
- barcode_matcher.py    - resolves a scanned barcode to the order line it fulfils
- shipment_processor.py - finalizes a fully scanned draft into a Shipment
- travel_document.py    - dispatch slip view model and HTML rendering
"""
