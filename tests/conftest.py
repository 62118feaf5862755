"""Shared fixtures for document tests."""

import pytest


@pytest.fixture
def sample_document_data():
    """A single-line invoice taxed with CGST and SGST at 9% each."""
    return {
        'document_type': 'invoice',
        'doc_no': 'INV-001',
        'doc_date': '2024-01-15',
        'due_date': '2024-02-14',
        'company': {
            'name': 'Acme Corp',
            'address': '12 MG Road, Bengaluru',
            'gst': '29ABCDE1234F1Z5',
            'email': 'billing@acme.example',
            'phone': '+91 80 1234 5678'
        },
        'bill_to': {
            'name': 'Globex Ltd',
            'address': '4 Park Street, Kolkata',
            'email': 'accounts@globex.example',
            'phone': '+91 33 8765 4321'
        },
        'line_items': [
            {
                'description': 'Web Development',
                'hsn_sac': '998314',
                'quantity': 2,
                'unit': 'hrs',
                'unit_price': 5000,
                'tax': [
                    {'name': 'CGST', 'rate': 9},
                    {'name': 'SGST', 'rate': 9}
                ]
            }
        ],
        'shipping': 0,
        'additional_charges': [],
        'rounding': 'nearest',
        'terms': ['Payment due within 30 days'],
        'bank_details': {
            'account_name': 'Acme Corp',
            'bank': 'State Bank of India',
            'account_no': '12345678901',
            'ifsc': 'SBIN0001234',
            'upi_id': 'acme@sbi'
        },
        'outputs': {
            'formats': ['json'],
            'show_amount_in_words': True,
            'show_qr': True
        }
    }
