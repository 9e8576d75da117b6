import threading

import customtkinter as ctk
from tkinter import messagebox

from crypto_core import TextCipherError, decrypt, encrypt, PBKDF2_ITER

ENCRYPT = "encrypt"
DECRYPT = "decrypt"


# -------------------- UI --------------------
class TextEncryptionApp(ctk.CTk):
    def __init__(self):
        super().__init__()
        self.title("Text Encryption Tool — AES-256-GCM / PBKDF2")
        self.geometry("780x620")
        ctk.set_appearance_mode("dark")  # default appearance
        ctk.set_default_color_theme("blue")

        self.mode = ENCRYPT

        self._build_ui()
        self._lock_ui(False)
        self._show_mode()

    # ---------- UI layout ----------
    def _build_ui(self):
        # Top bar
        top = ctk.CTkFrame(self, corner_radius=16)
        top.pack(fill="x", padx=16, pady=(16, 8))

        title = ctk.CTkLabel(top, text="Text Encryption Tool", font=("Segoe UI", 22, "bold"))
        title.pack(side="left", padx=12, pady=12)

        self.mode_switch = ctk.CTkSwitch(top, text="Light Mode", command=self._toggle_mode)
        self.mode_switch.pack(side="right", padx=12)

        subtitle = ctk.CTkLabel(self, text=(
            "Password-protect your text for secure encryption and decryption when sharing confidential data"),
            wraplength=740)
        subtitle.pack(padx=16, pady=(0, 4))

        # Mode buttons
        actions = ctk.CTkFrame(self, corner_radius=16)
        actions.pack(fill="x", padx=16, pady=8)

        self.encrypt_btn = ctk.CTkButton(actions, text="Encrypt", command=self._start_encrypt, width=140)
        self.encrypt_btn.pack(side="left", padx=12, pady=12)

        self.decrypt_btn = ctk.CTkButton(actions, text="Decrypt", command=self._start_decrypt, width=140)
        self.decrypt_btn.pack(side="left", padx=12, pady=12)

        self.mode_label = ctk.CTkLabel(actions, text="")
        self.mode_label.pack(side="left", padx=12)

        # Input text
        input_wrap = ctk.CTkFrame(self, corner_radius=16)
        input_wrap.pack(fill="x", padx=16, pady=8)

        self.input_box = ctk.CTkTextbox(input_wrap, height=110)
        self.input_box.pack(fill="x", padx=12, pady=12)

        # Password area
        pw_frame = ctk.CTkFrame(self, corner_radius=16)
        pw_frame.pack(fill="x", padx=16, pady=8)

        self.pw_entry = ctk.CTkEntry(pw_frame, placeholder_text="Password", show="*", width=420)
        self.pw_entry.pack(side="left", padx=(12, 8), pady=12)
        self.pw_entry.bind("<Return>", lambda _e: self._submit())

        self.show_pw = ctk.CTkCheckBox(pw_frame, text="Show", command=self._toggle_pw)
        self.show_pw.pack(side="left", padx=(0, 12))

        self.submit_btn = ctk.CTkButton(pw_frame, text="Submit", command=self._submit, width=120)
        self.submit_btn.pack(side="right", padx=12, pady=12)

        # Output & status
        out_wrap = ctk.CTkFrame(self, corner_radius=16)
        out_wrap.pack(fill="both", expand=True, padx=16, pady=8)

        self.output_box = ctk.CTkTextbox(out_wrap, height=120)
        self.output_box.pack(fill="both", expand=True, padx=12, pady=(12, 8))
        self.output_box.configure(state="disabled")

        self.status = ctk.CTkTextbox(out_wrap, height=70)
        self.status.pack(fill="x", padx=12, pady=(0, 12))
        self.status.insert("end", "Ready. Choose Encrypt or Decrypt, enter text and a password, then Submit.\n")
        self.status.configure(state="disabled")

        # Footer tips
        tips = ctk.CTkLabel(self, text=(
            f"Keys are derived with PBKDF2-HMAC-SHA256 ({PBKDF2_ITER:,} iterations). "
            "Without the password, encrypted text cannot be recovered."),
            wraplength=740)
        tips.pack(padx=16, pady=(0, 12))

    # ---------- Helpers ----------
    def _log(self, msg: str):
        self.status.configure(state="normal")
        self.status.insert("end", msg + "\n")
        self.status.see("end")
        self.status.configure(state="disabled")

    def _set_output(self, text: str):
        self.output_box.configure(state="normal")
        self.output_box.delete("1.0", "end")
        self.output_box.insert("1.0", text)
        self.output_box.configure(state="disabled")

    def _toggle_mode(self):
        if self.mode_switch.get():
            ctk.set_appearance_mode("light")
            self.mode_switch.configure(text="Dark Mode")
        else:
            ctk.set_appearance_mode("dark")
            self.mode_switch.configure(text="Light Mode")

    def _toggle_pw(self):
        self.pw_entry.configure(show="" if self.show_pw.get() else "*")

    def _show_mode(self):
        self.mode_label.configure(text=f"Mode: {self.mode.capitalize()}")

    def _lock_ui(self, working: bool):
        state = "disabled" if working else "normal"
        self.encrypt_btn.configure(state=state)
        self.decrypt_btn.configure(state=state)
        self.submit_btn.configure(state=state)
        self.pw_entry.configure(state=state)

    def _clear_password(self):
        # str is immutable; clearing the field and dropping references is all we can do
        self.pw_entry.delete(0, "end")

    def _copy_to_clipboard(self, text: str):
        self.clipboard_clear()
        self.clipboard_append(text)
        self._log("Copied to clipboard.")

    # ---------- Encrypt/Decrypt flows ----------
    def _select_mode(self, mode: str):
        self.mode = mode
        self.input_box.delete("1.0", "end")
        self._set_output("")
        self._show_mode()

    def _start_encrypt(self):
        self._select_mode(ENCRYPT)

    def _start_decrypt(self):
        self._select_mode(DECRYPT)

    def _submit(self):
        password = self.pw_entry.get()
        if not password:
            self._log("Enter a password first.")
            return
        self._clear_password()
        text = self.input_box.get("1.0", "end-1c")
        mode = self.mode

        def job():
            nonlocal password
            try:
                if mode == ENCRYPT:
                    result = encrypt(text, password)
                else:
                    result = decrypt(text, password)
            except TextCipherError as e:
                msg = e.user_message
                self.after(0, lambda: self._log(f"Error: {msg}"))
            except Exception as e:
                name = type(e).__name__
                self.after(0, lambda: self._log(f"Error: unexpected failure ({name})"))
                self.after(0, lambda: messagebox.showerror("Error", "Operation failed unexpectedly."))
            else:
                self.after(0, lambda: self._finish(mode, result))
            finally:
                password = None
                self.after(0, lambda: self._lock_ui(False))

        self._lock_ui(True)
        self._log("Encrypting…" if mode == ENCRYPT else "Decrypting…")
        threading.Thread(target=job, daemon=True).start()

    def _finish(self, mode: str, result: str):
        self._set_output(result)
        if mode == ENCRYPT:
            self._log("Encryption complete.")
            if messagebox.askyesno("Copy to Clipboard", "Copy encrypted text to clipboard?"):
                self._copy_to_clipboard(result)
        else:
            self._log("Decryption complete.")


def main():
    app = TextEncryptionApp()
    app.mainloop()


if __name__ == "__main__":
    main()
