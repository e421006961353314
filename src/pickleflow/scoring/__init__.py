from pickleflow.scoring.result_recorder import edit_match, finalize_match, set_score

__all__ = ["set_score", "finalize_match", "edit_match"]
