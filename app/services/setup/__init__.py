"""Setup (provisioning) services.

This package contains orchestration helpers that *provision* the Azure Storage
resources the app requires (blob container, queues, table, file share).
"""
