"""
Taskie Backend - Seed Data
============================

Reference data (job categories with posting fees in VND, provinces with their
wards) and the demo records used by the comprehensive seed.
"""

from datetime import date

CATEGORIES = [
    {"name": "Lắp ráp đồ dùng", "posting_fee": 10000, "description": "Assembly of furniture, equipment, etc."},
    {"name": "Sửa chữa", "posting_fee": 15000, "description": "Repair services for various items"},
    {"name": "Giao hàng", "posting_fee": 5000, "description": "Delivery and transportation services"},
    {"name": "Vệ sinh", "posting_fee": 8000, "description": "Cleaning services"},
    {"name": "Chuyển nhà", "posting_fee": 20000, "description": "Moving services"},
    {"name": "Làm vườn", "posting_fee": 12000, "description": "Gardening and landscaping"},
    {"name": "Giúp việc nhà", "posting_fee": 10000, "description": "Household chores"},
    {"name": "Khác", "posting_fee": 10000, "description": "Other miscellaneous tasks"},
]

LOCATIONS = [
    {
        "province": "Thành phố Huế",
        "wards": [
            "Phường Phú Hòa", "Phường Phú Cát", "Phường Phú Hậu", "Phường Phú Hiệp",
            "Phường Phú Hội", "Phường Phú Nhuận", "Phường Thuận Thành", "Phường Thuận Lộc",
            "Phường Thuận Hòa", "Phường Kim Long", "Phường Vỹ Dạ", "Phường Phường Đúc",
            "Phường Vĩnh Ninh", "Phường Xuân Phú", "Phường Trường An", "Phường Thuỷ Biều",
            "Phường Thuỷ Xuân", "Phường An Cựu", "Phường An Hòa", "Phường An Đông",
            "Phường An Tây", "Phường Hương Sơ", "Phường Hương Long", "Phường Hương Hồ",
            "Phường Hương Vinh", "Phường Hương An",
        ],
    },
    {
        "province": "Thành phố Hạ Long",
        "wards": [
            "Phường Bạch Đằng", "Phường Bãi Cháy", "Phường Cao Thắng", "Phường Cao Xanh",
            "Phường Đại Yên", "Phường Giếng Đáy", "Phường Hà Khánh", "Phường Hà Khẩu",
            "Phường Hà Lầm", "Phường Hà Phong", "Phường Hà Trung", "Phường Hà Tu",
            "Phường Hồng Gai", "Phường Hồng Hà", "Phường Hồng Hải", "Phường Hùng Thắng",
            "Phường Trần Hưng Đạo", "Phường Tuần Châu", "Phường Việt Hưng", "Phường Yết Kiêu",
            "Xã Bằng Cả", "Xã Dân Chủ", "Xã Đồng Lâm", "Xã Đồng Sơn", "Xã Hòa Bình",
            "Xã Kỳ Thượng", "Xã Lê Lợi", "Xã Sơn Dương", "Xã Tân Dân", "Xã Thống Nhất",
            "Xã Vũ Oai",
        ],
    },
    {
        "province": "Thành phố Móng Cái",
        "wards": [
            "Phường Bình Ngọc", "Phường Hải Hòa", "Phường Hải Yên", "Phường Hòa Lạc",
            "Phường Ka Long", "Phường Ninh Dương", "Phường Trà Cổ", "Phường Trần Phú",
            "Xã Bắc Sơn", "Xã Hải Đông", "Xã Hải Sơn", "Xã Hải Tiến", "Xã Hải Xuân",
            "Xã Quảng Nghĩa", "Xã Vạn Ninh", "Xã Vĩnh Thực", "Xã Vĩnh Trung",
        ],
    },
    {
        "province": "Thành phố Cẩm Phả",
        "wards": [
            "Phường Cẩm Bình", "Phường Cẩm Đông", "Phường Cẩm Phú", "Phường Cẩm Sơn",
            "Phường Cẩm Tây", "Phường Cẩm Thạch", "Phường Cẩm Thành", "Phường Cẩm Thịnh",
            "Phường Cẩm Thủy", "Phường Cẩm Trung", "Phường Cửa Ông", "Phường Mông Dương",
            "Phường Quang Hanh", "Xã Cẩm Hải", "Xã Cộng Hòa", "Xã Dương Huy",
        ],
    },
    {
        "province": "Thành phố Uông Bí",
        "wards": [
            "Phường Bắc Sơn", "Phường Nam Khê", "Phường Phương Đông", "Phường Phương Nam",
            "Phường Quang Trung", "Phường Thanh Sơn", "Phường Trưng Vương", "Phường Vàng Danh",
            "Phường Yên Thanh", "Xã Điền Công", "Xã Phương Đông", "Xã Thượng Yên Công",
            "Xã Yên Thượng",
        ],
    },
    {
        "province": "Thị xã Quảng Yên",
        "wards": [
            "Phường Cộng Hòa", "Phường Đông Mai", "Phường Hà An", "Phường Minh Thành",
            "Phường Nam Hòa", "Phường Phong Cốc", "Phường Phong Hải", "Phường Quảng Yên",
            "Phường Tân An", "Phường Yên Giang", "Phường Yên Hải", "Xã Cẩm La",
            "Xã Hiệp Hòa", "Xã Hoàng Tân", "Xã Liên Hòa", "Xã Liên Vị", "Xã Sông Khoai",
            "Xã Tiền An", "Xã Tiền Phong",
        ],
    },
    {
        "province": "Huyện Vân Đồn",
        "wards": [
            "Thị trấn Cái Rồng", "Xã Bản Sen", "Xã Bình Dân", "Xã Đài Xuyên", "Xã Đoàn Kết",
            "Xã Đông Xá", "Xã Hạ Long", "Xã Minh Châu", "Xã Ngọc Vừng", "Xã Quan Lạn",
            "Xã Thắng Lợi", "Xã Vạn Yên",
        ],
    },
    {
        "province": "Huyện Cô Tô",
        "wards": ["Thị trấn Cô Tô", "Xã Đồng Tiến", "Xã Thanh Lân"],
    },
    {
        "province": "Huyện Đông Triều",
        "wards": [
            "Thị trấn Đông Triều", "Thị trấn Mạo Khê", "Xã An Sinh", "Xã Bình Dương",
            "Xã Bình Khê", "Xã Đức Chính", "Xã Hồng Phong", "Xã Hồng Thái Đông",
            "Xã Hồng Thái Tây", "Xã Hưng Đạo", "Xã Kim Sơn", "Xã Nguyễn Huệ", "Xã Tân Việt",
            "Xã Thủy An", "Xã Tràng An", "Xã Tràng Lương", "Xã Việt Dân", "Xã Xuân Sơn",
            "Xã Yên Đức", "Xã Yên Thọ",
        ],
    },
]

ADMIN_FULL_NAME = "Admin User"
ADMIN_DATE_OF_BIRTH = date(1990, 1, 1)

# ── Demo data (comprehensive seed) ────────────────────────────────────────

DEMO_PASSWORD = "password123"

DEMO_REQUESTERS = [
    {"full_name": "Nguyễn Văn An", "date_of_birth": date(1985, 5, 15), "email": "requester1@taskie.com", "phone": "0912345678"},
    {"full_name": "Trần Thị Bình", "date_of_birth": date(1992, 8, 20), "email": "requester2@taskie.com", "phone": "0923456789"},
    {"full_name": "Lê Văn Cường", "date_of_birth": date(1988, 3, 10), "email": "requester3@taskie.com", "phone": "0934567890"},
    {"full_name": "Phạm Thị Dung", "date_of_birth": date(1995, 11, 25), "email": "requester4@taskie.com", "phone": "0945678901"},
    {"full_name": "Hoàng Văn Em", "date_of_birth": date(1990, 7, 12), "email": "requester5@taskie.com", "phone": "0956789012"},
]

DEMO_TASKERS = [
    {"full_name": "Nguyễn Thị Phương", "date_of_birth": date(1993, 4, 18), "email": "tasker1@taskie.com", "phone": "0967890123"},
    {"full_name": "Trần Văn Hùng", "date_of_birth": date(1987, 9, 30), "email": "tasker2@taskie.com", "phone": "0978901234"},
    {"full_name": "Lê Thị Mai", "date_of_birth": date(1994, 12, 5), "email": "tasker3@taskie.com", "phone": "0989012345"},
    {"full_name": "Phạm Văn Nam", "date_of_birth": date(1991, 6, 22), "email": "tasker4@taskie.com", "phone": "0990123456"},
    {"full_name": "Hoàng Thị Oanh", "date_of_birth": date(1989, 2, 14), "email": "tasker5@taskie.com", "phone": "0901234567"},
]

# requester: index into DEMO_REQUESTERS; ward: index into the province's wards;
# deadline_days: offset from now (negative = past)
DEMO_TASKS = [
    {
        "title": "Lắp ráp bàn ghế IKEA",
        "description": "Cần người lắp ráp bộ bàn ghế IKEA tại nhà. Đã có đầy đủ dụng cụ và hướng dẫn. Cần hoàn thành trong 2 ngày.",
        "category": "Lắp ráp đồ dùng", "province": "Thành phố Huế", "ward": 0,
        "price": 200000, "deadline_days": 2, "payment_proof": True, "status": "pending", "requester": 0,
    },
    {
        "title": "Sửa chữa máy lạnh không hoạt động",
        "description": "Máy lạnh nhà tôi không lạnh, cần thợ có kinh nghiệm kiểm tra và sửa chữa. Máy đã dùng được 3 năm.",
        "category": "Sửa chữa", "province": "Thành phố Hạ Long", "ward": 0,
        "price": 500000, "deadline_days": 5, "payment_proof": False, "status": "pending", "requester": 1,
    },
    {
        "title": "Giao hàng từ siêu thị về nhà",
        "description": "Cần giao hàng từ siêu thị Coopmart về nhà. Khoảng cách 5km. Hàng nặng khoảng 20kg.",
        "category": "Giao hàng", "province": "Thành phố Móng Cái", "ward": 0,
        "price": 100000, "deadline_days": -1, "payment_proof": True, "status": "completed", "requester": 2,
    },
    {
        "title": "Vệ sinh nhà cửa cuối tuần",
        "description": "Cần người vệ sinh nhà 2 tầng, diện tích 100m2. Bao gồm quét dọn, lau nhà, vệ sinh phòng tắm và bếp.",
        "category": "Vệ sinh", "province": "Thành phố Huế", "ward": 1,
        "price": 300000, "deadline_days": 3, "payment_proof": True, "status": "pending", "requester": 0,
    },
    {
        "title": "Chuyển nhà từ quận 1 sang quận 7",
        "description": "Cần đội ngũ chuyển nhà. Có đồ đạc lớn như tủ lạnh, máy giặt. Cần xe tải và 2-3 người.",
        "category": "Chuyển nhà", "province": "Thành phố Hạ Long", "ward": 1,
        "price": 1500000, "deadline_days": 7, "payment_proof": False, "status": "pending", "requester": 3,
    },
    {
        "title": "Làm vườn và cắt tỉa cây cảnh",
        "description": "Cần người có kinh nghiệm làm vườn để cắt tỉa cây cảnh, nhổ cỏ, và chăm sóc vườn hoa.",
        "category": "Làm vườn", "province": "Thành phố Móng Cái", "ward": 1,
        "price": 250000, "deadline_days": 4, "payment_proof": True, "status": "pending", "requester": 4,
    },
    {
        "title": "Giúp việc nhà hàng tuần",
        "description": "Cần người giúp việc nhà 2 lần/tuần. Công việc: nấu ăn, giặt ủi, dọn dẹp. Thời gian linh hoạt.",
        "category": "Giúp việc nhà", "province": "Thành phố Huế", "ward": 2,
        "price": 400000, "deadline_days": 6, "payment_proof": False, "status": "pending", "requester": 1,
    },
    {
        "title": "Dạy kèm tiếng Anh cho trẻ em",
        "description": "Cần giáo viên dạy kèm tiếng Anh cho con 8 tuổi. 2 buổi/tuần, mỗi buổi 1.5 giờ.",
        "category": "Khác", "province": "Thành phố Hạ Long", "ward": 2,
        "price": 600000, "deadline_days": -3, "payment_proof": True, "status": "completed", "requester": 2,
    },
    {
        "title": "Sửa chữa hệ thống điện trong nhà",
        "description": "Hệ thống điện nhà có vấn đề, cần thợ điện chuyên nghiệp kiểm tra và sửa chữa. Có một số ổ cắm không hoạt động.",
        "category": "Sửa chữa", "province": "Thành phố Móng Cái", "ward": 2,
        "price": 800000, "deadline_days": 1, "payment_proof": True, "status": "pending", "requester": 3,
    },
    {
        "title": "Giao bánh mì sáng",
        "description": "Cần giao 20 ổ bánh mì từ tiệm bánh đến văn phòng. Khoảng cách 2km. Giao trước 8h sáng.",
        "category": "Giao hàng", "province": "Thành phố Huế", "ward": 3,
        "price": 50000, "deadline_days": 1, "payment_proof": False, "status": "pending", "requester": 4,
    },
]

# task: index into the pending demo tasks; sender/receiver: ("tasker"|"requester", index)
DEMO_MESSAGES = [
    {"task": 0, "sender": ("tasker", 0), "receiver": ("requester", 0), "is_read": True,
     "content": "Xin chào! Tôi thấy bạn cần lắp ráp bàn ghế. Tôi có kinh nghiệm lắp ráp đồ nội thất IKEA. Bạn có thể cho tôi biết thêm chi tiết không?"},
    {"task": 0, "sender": ("requester", 0), "receiver": ("tasker", 0), "is_read": True,
     "content": "Cảm ơn bạn đã quan tâm! Bộ bàn ghế này khá đơn giản, có hướng dẫn đầy đủ. Bạn có thể làm trong 2-3 giờ không?"},
    {"task": 0, "sender": ("tasker", 0), "receiver": ("requester", 0), "is_read": False,
     "content": "Vâng, tôi có thể hoàn thành trong 2-3 giờ. Bạn muốn tôi đến vào lúc nào?"},
    {"task": 1, "sender": ("tasker", 1), "receiver": ("requester", 1), "is_read": True,
     "content": "Chào bạn! Tôi là thợ sửa máy lạnh có 5 năm kinh nghiệm. Tôi có thể đến kiểm tra máy lạnh của bạn vào cuối tuần này được không?"},
    {"task": 1, "sender": ("requester", 1), "receiver": ("tasker", 1), "is_read": True,
     "content": "Tuyệt vời! Bạn có thể đến vào sáng thứ 7 không? Tôi ở nhà cả ngày."},
    {"task": 2, "sender": ("tasker", 2), "receiver": ("requester", 0), "is_read": False,
     "content": "Xin chào! Tôi có thể giúp bạn vệ sinh nhà cửa. Tôi có kinh nghiệm làm việc tại các gia đình. Bạn muốn tôi đến vào lúc nào?"},
    {"task": 3, "sender": ("tasker", 0), "receiver": ("requester", 3), "is_read": True,
     "content": "Tôi có đội ngũ 3 người và xe tải. Có thể giúp bạn chuyển nhà vào cuối tuần này."},
    {"task": 3, "sender": ("tasker", 1), "receiver": ("requester", 3), "is_read": False,
     "content": "Xin chào! Tôi cũng có thể giúp bạn chuyển nhà. Giá của tôi có thể thương lượng."},
]

# (tasker index, pending task index)
DEMO_FAVORITES = [(0, 0), (0, 2), (1, 1), (1, 3), (2, 4)]
