"""
htw_pipeline.pipelines — End-to-end import orchestration.

  bulk_import — uploaded CSV -> typed records -> one batch insert
"""
